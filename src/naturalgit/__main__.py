"""naturalgit CLI bootstrap."""

from __future__ import annotations

from naturalgit.cli import app

if __name__ == "__main__":
    app()
