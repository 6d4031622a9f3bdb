"""Code vulnerability analysis core."""
