"""
Convenience entry point for running agendagrid as a module.

Usage: python -m agendagrid [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
