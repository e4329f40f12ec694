"""Allow running as ``python -m regsuite``."""

from regsuite.cli.main import app

if __name__ == "__main__":
    app()
