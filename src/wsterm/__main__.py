from __future__ import annotations

from wsterm.cli import cli

if __name__ == "__main__":
    cli()
