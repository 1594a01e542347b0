"""
Entry point for running Kodiary as a module.

Usage:
    python -m kodiary --help
    python -m kodiary analyze --text "Yesterday I go to school." --lang en --explain ko
    python -m kodiary languages
"""
from .cli import app


if __name__ == "__main__":
    app()
