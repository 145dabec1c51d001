"""Entry point for running Codeloom as a module.

Usage:
    python -m codeloom [command] [options]

Example:
    python -m codeloom render header.tmpl --arg guard=_HEADER_H
    python -m codeloom check header.tmpl
"""

from codeloom.cli import app

if __name__ == "__main__":
    app()
