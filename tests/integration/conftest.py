"""Fixtures for integration tests against the local mock form."""

from pathlib import Path

import pytest
from dotenv import load_dotenv
from playwright.async_api import Error as PlaywrightError

from regsuite.core.browser import PlaywrightBrowser
from regsuite.services.mock import MockServer
from regsuite.utils.config import AppConfig

# Load .env file at test startup
load_dotenv(Path(__file__).parent.parent.parent / ".env")


@pytest.fixture
def mock_server(mock_pages_dir: Path):
    """Serve the mock registration form on an ephemeral port."""
    with MockServer(mock_pages_dir) as server:
        yield server


@pytest.fixture
def mock_config(tmp_path: Path, mock_server: MockServer) -> AppConfig:
    """Configuration pointing at the mock server, with short timeouts."""
    return AppConfig(
        output_dir=tmp_path / "output",
        base_url=mock_server.base_url,
        page_timeout=15000,
        element_timeout=3000,
        max_attempts=3,
        retry_delay=100,
        confirm_timeout=500,
    )


@pytest.fixture
async def browser(mock_config: AppConfig):
    """A launched headless browser; skips when Chromium is unavailable."""
    browser = PlaywrightBrowser(
        headless=True,
        viewport=mock_config.viewport,
        element_timeout=mock_config.element_timeout,
    )
    try:
        await browser.launch()
    except PlaywrightError as e:
        await browser.close()
        pytest.skip(f"Chromium is not available: {e}")
    yield browser
    await browser.close()
