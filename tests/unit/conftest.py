"""Unit test fixtures for regsuite.

Fixtures inherited from the parent conftest.py:
- mock_browser: Mock browser conforming to BrowserProtocol
- mock_session: SessionLogger instance using tmp_path
- app_config: AppConfig with zero delays
- fixture_set / student_record: the bundled student fixture
- mock_pages_dir: Path to mock_pages/registration
"""

from collections.abc import Callable

import pytest

from regsuite.core.protocols import ElementState


@pytest.fixture
def present_states() -> Callable[..., Callable[[str], ElementState]]:
    """Factory for ``query_state`` side effects.

    ``present_states({"#userForm": {}})`` reports ``#userForm`` as present
    (with any extra ElementState fields given) and everything else missing.
    """

    def factory(states: dict[str, dict]) -> Callable[[str], ElementState]:
        def query(selector: str) -> ElementState:
            if selector in states:
                return ElementState(selector=selector, exists=True, **states[selector])
            return ElementState.missing(selector)

        return query

    return factory
