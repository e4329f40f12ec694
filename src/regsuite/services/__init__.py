"""Local services used to exercise the suite without the live site."""

from pathlib import Path

from regsuite.services.mock import FORM_ROUTE, MockServer

MOCK_PAGES_DIR = Path(__file__).parent.parent.parent.parent / "mock_pages"


def get_mock_pages_dir(suite: str = "registration") -> Path:
    """Get the directory holding a suite's mock pages.

    Args:
        suite: Suite name.

    Returns:
        Path to the suite's mock pages.
    """
    return MOCK_PAGES_DIR / suite


__all__ = ["FORM_ROUTE", "MOCK_PAGES_DIR", "MockServer", "get_mock_pages_dir"]
