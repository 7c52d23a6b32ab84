# filehound/main.py
"""Main entry point for the filehound CLI application."""

from filehound.cli.interface import main_cli


def entrypoint():
    """Function to be called by the script defined in pyproject.toml."""
    main_cli(prog_name="filehound")

if __name__ == '__main__':
    entrypoint()
