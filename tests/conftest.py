"""Shared pytest fixtures for regsuite tests.

This module provides common fixtures used across unit, integration, and e2e tests:
a protocol-conforming mock browser, a fast test configuration, a session
logger writing to a temp directory, and the default student fixture.
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from regsuite.core.protocols import BrowserProtocol, ElementState
from regsuite.form.student import FixtureSet, StudentRecord, load_fixtures
from regsuite.utils.config import AppConfig
from regsuite.utils.session import SessionLogger


@pytest.fixture
def mock_browser() -> MagicMock:
    """Mock browser for unit tests.

    Creates a MagicMock that conforms to BrowserProtocol with all
    async methods configured as AsyncMock. Every selector reports as
    missing unless a test overrides ``query_state``.

    Returns:
        MagicMock: A mock browser instance with async method support.
    """
    browser = MagicMock(spec=BrowserProtocol)
    browser.launch = AsyncMock()
    browser.navigate = AsyncMock()
    browser.block_requests = AsyncMock()
    browser.query_state = AsyncMock(side_effect=ElementState.missing)
    browser.count = AsyncMock(return_value=0)
    browser.fill = AsyncMock()
    browser.type_text = AsyncMock()
    browser.click = AsyncMock()
    browser.click_label = AsyncMock()
    browser.click_option = AsyncMock()
    browser.focus = AsyncMock()
    browser.press = AsyncMock()
    browser.scroll_into_view = AsyncMock()
    browser.scroll_to_bottom = AsyncMock()
    browser.select_option = AsyncMock()
    browser.set_input_files = AsyncMock()
    browser.remove_elements = AsyncMock(return_value=0)
    browser.table_rows = AsyncMock(return_value=[])
    browser.screenshot = AsyncMock(return_value=b"fake_screenshot_data")
    browser.html = AsyncMock(return_value="<html></html>")
    browser.url = AsyncMock(
        return_value="https://demoqa.com/automation-practice-form"
    )
    browser.text_content = AsyncMock(return_value="Practice Form")
    browser.close = AsyncMock()
    return browser


@pytest.fixture
def mock_session(tmp_path: Path) -> SessionLogger:
    """Session logger with temp directory.

    Args:
        tmp_path: Pytest fixture providing a temporary directory.

    Returns:
        SessionLogger: A session logger configured for testing.
    """
    return SessionLogger(
        output_dir=tmp_path,
        suite="registration",
        target="mock",
    )


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """Test configuration.

    Zero delays and predicate windows so retry loops finish immediately.

    Args:
        tmp_path: Pytest fixture providing a temporary directory.

    Returns:
        AppConfig: A configuration object for testing.
    """
    return AppConfig(
        output_dir=tmp_path / "output",
        page_timeout=5000,
        element_timeout=0,
        max_attempts=3,
        retry_delay=0,
        confirm_timeout=0,
    )


@pytest.fixture
def fixture_set() -> FixtureSet:
    """The bundled student fixture and its directory."""
    return load_fixtures()


@pytest.fixture
def student_record(fixture_set: FixtureSet) -> StudentRecord:
    """The default student record from ``student_data.json``."""
    return fixture_set.record


@pytest.fixture
def mock_pages_dir() -> Path:
    """Path to the registration mock pages directory.

    Returns:
        Path: Path to the mock_pages/registration directory.
    """
    return Path(__file__).parent.parent / "mock_pages" / "registration"
