#!/usr/bin/env python3
"""
Command-line entry point: analyse a source file for vulnerabilities.

The report is printed to stdout; failures go to stderr with exit code 1.
"""

import sys
import logging
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from config import AppSettings
from src.agent import create_analyzer
from src.models import AnalysisResult


def run_with_args(argv=None) -> int:
    """Run an analysis with command-line arguments."""
    import argparse

    parser = argparse.ArgumentParser(
        description="AI-Powered Code Vulnerability Analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py app.py
  python main.py handler.js --model gpt-4o
  cat snippet.php | python main.py -
        """
    )

    parser.add_argument(
        "file",
        help="Source file to analyse ('-' reads stdin)"
    )
    parser.add_argument(
        "--model",
        help="Model to use (default: LLM_MODEL or gpt-3.5-turbo)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )

    args = parser.parse_args(argv)

    # Configure logging
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)

    if args.file == "-":
        code = sys.stdin.read()
    else:
        path = Path(args.file)
        if not path.exists():
            print(f"[!] File not found: {args.file}", file=sys.stderr)
            return 1
        code = path.read_text(encoding="utf-8", errors="replace")

    settings = AppSettings.from_env()
    if args.model:
        settings.llm.model = args.model

    analyzer = create_analyzer(settings)
    try:
        outcome = analyzer.analyze(code)
    finally:
        analyzer.close()

    if isinstance(outcome, AnalysisResult):
        print(outcome.text)
        return 0

    print(f"[!] {outcome.message}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(run_with_args())
