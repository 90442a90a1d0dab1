"""Entry point for running connect_xmlapi as a module.

This allows the package to be executed as:
    python -m connect_xmlapi
"""

from connect_xmlapi.cli.main import cli

if __name__ == "__main__":
    cli()
