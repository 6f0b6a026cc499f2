from __future__ import annotations

from lintkit.cli import app

if __name__ == "__main__":
    app()
