"""Entry point for ``python -m datacontracts``."""

from datacontracts.cli.app import app

if __name__ == "__main__":
    app()
