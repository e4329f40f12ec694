"""Tests for the __main__ module entry point."""

import subprocess
import sys


def test_module_entry_point_help():
    """Running as a module with --help lists the commands."""
    result = subprocess.run(
        [sys.executable, "-m", "regsuite", "--help"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert "run" in result.stdout.lower()


def test_module_imports():
    import regsuite.__main__
    assert hasattr(regsuite.__main__, "app")
