"""Allow ``python -m sync_upstream``."""

from sync_upstream.cli import cli_main

if __name__ == "__main__":
    cli_main()
