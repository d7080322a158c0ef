"""Main entry point when executing ghfetch as a package.

This allows running the package using python -m ghfetch.
"""

from ghfetch.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
