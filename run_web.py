#!/usr/bin/env python3
"""
Launch script for the Code Vulnerability Analyzer web interface.

Starts the FastAPI app with uvicorn on the configured host and port
(8081 unless PORT says otherwise).
"""

import sys
import os
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from config import AppSettings


def main():
    """Start the web server."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed.")
        print("Please run: pip install -e .")
        sys.exit(1)

    settings = AppSettings.from_env()

    print("Starting Code Vulnerability Analyzer...")
    print("=" * 60)
    print()
    print(f"  Web Interface:  http://localhost:{settings.server.port}")
    print(f"  Model:          {settings.llm.model}")
    if not settings.llm.api_key:
        print("  WARNING:        OPENAI_API_KEY is not set")
    print()
    print("=" * 60)
    print()
    print("Press CTRL+C to stop the server")
    print()

    # Change to project directory
    os.chdir(project_root)

    uvicorn.run(
        "api.main:app",
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
