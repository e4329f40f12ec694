"""Playwright-based browser automation wrapper with stealth capabilities.

This module provides a browser automation wrapper built on Playwright with
anti-detection features via playwright-stealth. It implements the
BrowserProtocol consumed by the reliable action executor and the
registration form page object.
"""

from __future__ import annotations

import re
from pathlib import Path

from playwright.async_api import (
    Browser,
    Page,
    Playwright,
    Request,
    Route,
    async_playwright,
)
from playwright.async_api import (
    Error as PlaywrightError,
)
from playwright.async_api import (
    TimeoutError as PlaywrightTimeoutError,
)
from playwright_stealth import Stealth

from regsuite.core.executor import IgnorableFailurePolicy
from regsuite.core.protocols import ElementState
from regsuite.utils.exceptions import ElementNotFound, NavigationError

_ELEMENT_STATE_JS = """
(el) => {
    const style = window.getComputedStyle(el);
    const rect = el.getBoundingClientRect();
    return {
        visible: (rect.width > 0 || rect.height > 0)
            && style.visibility !== 'hidden'
            && style.display !== 'none',
        value: ('value' in el) ? String(el.value) : null,
        text: (el.innerText || '').trim(),
        classes: Array.from(el.classList),
        checked: !!el.checked,
        disabled: !!el.disabled,
        borderColor: style.borderColor,
        color: style.color,
    };
}
"""

_REMOVE_JS = """
(selector) => {
    const found = document.querySelectorAll(selector);
    found.forEach((el) => el.remove());
    return found.length;
}
"""

_ROWS_JS = """
(rows) => rows.map(
    (row) => Array.from(row.querySelectorAll('td')).map((td) => td.innerText.trim())
)
"""


class PlaywrightBrowser:
    """Playwright-based browser automation with stealth.

    Launches Chromium with a fixed viewport, tracks in-flight requests so a
    timed-out navigation can report which resources were still pending, and
    can answer allow-listed third-party requests with an empty response.

    Attributes:
        headless: Whether to run browser in headless mode.
        viewport: Viewport size as (width, height).
        element_timeout: Default timeout for element interactions in ms.
        stealth: Whether to apply playwright-stealth to the page.

    Example:
        >>> browser = PlaywrightBrowser(headless=True)
        >>> await browser.launch()
        >>> await browser.navigate("https://demoqa.com/automation-practice-form")
    """

    def __init__(
        self,
        headless: bool = True,
        viewport: tuple[int, int] = (1280, 800),
        element_timeout: int = 20000,
        stealth: bool = True,
    ) -> None:
        self.headless = headless
        self.viewport = viewport
        self.element_timeout = element_timeout
        self.stealth = stealth
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._page: Page | None = None
        self._inflight: set[Request] = set()
        self._failed: list[str] = []

    async def launch(self) -> None:
        """Launch browser with stealth settings.

        Starts Playwright, launches a Chromium browser, creates a page with
        the configured viewport and starts request tracking.
        """
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self.headless)
        width, height = self.viewport
        self._page = await self._browser.new_page(
            viewport={"width": width, "height": height}
        )
        if self.stealth:
            await Stealth().apply_stealth_async(self._page)
        self._page.on("request", self._on_request)
        self._page.on("requestfinished", self._on_request_done)
        self._page.on("requestfailed", self._on_request_failed)

    def _on_request(self, request: Request) -> None:
        self._inflight.add(request)

    def _on_request_done(self, request: Request) -> None:
        self._inflight.discard(request)

    def _on_request_failed(self, request: Request) -> None:
        self._inflight.discard(request)
        self._failed.append(request.url)

    async def block_requests(self, patterns: tuple[str, ...]) -> None:
        """Answer requests to allow-listed hosts with an empty 200.

        Args:
            patterns: Host substrings, e.g. ``("doubleclick", "analytics")``.

        Raises:
            RuntimeError: If browser not launched.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        policy = IgnorableFailurePolicy(patterns)
        if not policy.patterns:
            return

        async def fulfill_empty(route: Route) -> None:
            await route.fulfill(status=200, body="")

        await self._page.route(policy.matches_url, fulfill_empty)

    async def navigate(self, url: str, timeout: int = 60000) -> None:
        """Navigate to URL and wait for the load event.

        Args:
            url: The URL to navigate to.
            timeout: Maximum time to wait for navigation in milliseconds.

        Raises:
            RuntimeError: If browser not launched.
            NavigationError: If navigation fails. ``failed_urls`` lists the
                resources that failed or were still pending on timeout, or the
                page itself when the document could not be loaded.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        self._failed = []
        self._inflight.clear()
        try:
            await self._page.goto(url, timeout=timeout, wait_until="load")
        except PlaywrightTimeoutError as e:
            pending = {r.url for r in self._inflight}
            failed_urls = sorted(pending | set(self._failed))
            raise NavigationError(
                f"Timed out loading {url} with {len(pending)} request(s) pending "
                f"and {len(self._failed)} failed",
                url=url,
                failed_urls=failed_urls,
            ) from e
        except PlaywrightError as e:
            raise NavigationError(
                f"Failed to navigate to {url}: {e}", url=url, failed_urls=[url]
            ) from e

    async def query_state(self, selector: str) -> ElementState:
        """Observe the first element matching selector.

        Args:
            selector: CSS selector for the element.

        Returns:
            ElementState, with ``exists=False`` when nothing matches.

        Raises:
            RuntimeError: If browser not launched.
            ElementNotFound: If the element detaches while being read.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        try:
            element = await self._page.query_selector(selector)
            if element is None:
                return ElementState.missing(selector)
            data = await element.evaluate(_ELEMENT_STATE_JS)
        except PlaywrightError as e:
            raise ElementNotFound(f"Cannot read {selector}: {e}") from e
        return ElementState(
            selector=selector,
            exists=True,
            visible=bool(data["visible"]),
            value=data["value"],
            text=data["text"],
            classes=tuple(data["classes"]),
            checked=bool(data["checked"]),
            disabled=bool(data["disabled"]),
            border_color=data["borderColor"],
            color=data["color"],
        )

    async def count(self, selector: str) -> int:
        """Count elements matching selector.

        Raises:
            RuntimeError: If browser not launched.
            ElementNotFound: If the page cannot be queried.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        try:
            return await self._page.locator(selector).count()
        except PlaywrightError as e:
            raise ElementNotFound(f"Cannot count {selector}: {e}") from e

    async def fill(self, selector: str, value: str) -> None:
        """Fill form field, replacing its current value.

        Raises:
            RuntimeError: If browser not launched.
            ElementNotFound: If the field cannot be filled in time.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        try:
            await self._page.fill(selector, value, timeout=self.element_timeout)
        except PlaywrightError as e:
            raise ElementNotFound(f"Cannot fill {selector}: {e}") from e

    async def type_text(self, selector: str, text: str) -> None:
        """Type text key by key, firing the page's input handlers.

        Raises:
            RuntimeError: If browser not launched.
            ElementNotFound: If the element cannot be typed into in time.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        try:
            await self._page.locator(selector).first.press_sequentially(
                text, timeout=self.element_timeout
            )
        except PlaywrightError as e:
            raise ElementNotFound(f"Cannot type into {selector}: {e}") from e

    async def click(
        self, selector: str, force: bool = False, timeout: int | None = None
    ) -> None:
        """Click the first element matching selector.

        Args:
            selector: CSS selector of the element.
            force: Skip actionability checks (overlays, animations).
            timeout: Maximum wait in milliseconds. Defaults to element_timeout.

        Raises:
            RuntimeError: If browser not launched.
            ElementNotFound: If the element cannot be clicked in time.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        try:
            await self._page.locator(selector).first.click(
                force=force, timeout=timeout or self.element_timeout
            )
        except PlaywrightError as e:
            raise ElementNotFound(f"Element not found: {selector}") from e

    async def click_label(self, text: str) -> None:
        """Click the label whose whole text is ``text``.

        Exact matching keeps "Male" from hitting the "Female" label.

        Raises:
            RuntimeError: If browser not launched.
            ElementNotFound: If no such label can be clicked.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        pattern = re.compile(rf"^\s*{re.escape(text)}\s*$")
        try:
            await self._page.locator("label", has_text=pattern).first.click(
                timeout=self.element_timeout
            )
        except PlaywrightError as e:
            raise ElementNotFound(f"No label with text '{text}'") from e

    async def click_option(self, menu_selector: str, text: str) -> None:
        """Click the entry containing ``text`` in an open dropdown menu.

        Raises:
            RuntimeError: If browser not launched.
            ElementNotFound: If the option does not appear in time.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        try:
            await self._page.locator(menu_selector).get_by_text(text).first.click(
                force=True, timeout=self.element_timeout
            )
        except PlaywrightError as e:
            raise ElementNotFound(
                f"No option '{text}' in {menu_selector}"
            ) from e

    async def focus(self, selector: str) -> None:
        """Focus an element.

        Raises:
            RuntimeError: If browser not launched.
            ElementNotFound: If the element cannot be focused in time.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        try:
            await self._page.focus(selector, timeout=self.element_timeout)
        except PlaywrightError as e:
            raise ElementNotFound(f"Cannot focus {selector}: {e}") from e

    async def press(self, selector: str, key: str) -> None:
        """Press a key while an element has focus.

        Raises:
            RuntimeError: If browser not launched.
            ElementNotFound: If the element does not appear in time.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        try:
            await self._page.press(selector, key, timeout=self.element_timeout)
        except PlaywrightError as e:
            raise ElementNotFound(f"Cannot press {key} on {selector}") from e

    async def scroll_into_view(self, selector: str) -> None:
        """Scroll an element into the viewport.

        Raises:
            RuntimeError: If browser not launched.
            ElementNotFound: If the element does not appear in time.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        try:
            await self._page.locator(selector).first.scroll_into_view_if_needed(
                timeout=self.element_timeout
            )
        except PlaywrightError as e:
            raise ElementNotFound(f"Cannot scroll to {selector}") from e

    async def scroll_to_bottom(self) -> None:
        """Scroll the window to the bottom of the document.

        Raises:
            RuntimeError: If browser not launched.
            ElementNotFound: If the document cannot be scrolled.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        try:
            await self._page.evaluate(
                "window.scrollTo(0, document.body.scrollHeight)"
            )
        except PlaywrightError as e:
            raise ElementNotFound(f"Cannot scroll document: {e}") from e

    async def select_option(self, selector: str, value: str) -> None:
        """Select a native dropdown option by value or label.

        Raises:
            RuntimeError: If browser not launched.
            ElementNotFound: If the select does not appear in time.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        try:
            await self._page.select_option(
                selector, value, timeout=self.element_timeout
            )
        except PlaywrightError as e:
            raise ElementNotFound(f"Cannot select '{value}' in {selector}") from e

    async def set_input_files(self, selector: str, path: Path) -> None:
        """Attach a file to a file input.

        Raises:
            RuntimeError: If browser not launched.
            ElementNotFound: If the input cannot take the file.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        try:
            await self._page.set_input_files(
                selector, str(path), timeout=self.element_timeout
            )
        except PlaywrightError as e:
            raise ElementNotFound(
                f"Cannot attach {path.name} to {selector}: {e}"
            ) from e

    async def remove_elements(self, selector: str) -> int:
        """Remove every element matching selector from the DOM.

        Returns:
            How many elements were removed.

        Raises:
            RuntimeError: If browser not launched.
            ElementNotFound: If the page cannot be scripted.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        try:
            return int(await self._page.evaluate(_REMOVE_JS, selector))
        except PlaywrightError as e:
            raise ElementNotFound(f"Cannot remove {selector}: {e}") from e

    async def table_rows(self, selector: str) -> list[list[str]]:
        """Get the cell texts of every row matching selector.

        Raises:
            RuntimeError: If browser not launched.
            ElementNotFound: If the rows cannot be read.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        try:
            return await self._page.eval_on_selector_all(selector, _ROWS_JS)
        except PlaywrightError as e:
            raise ElementNotFound(f"Cannot read rows {selector}: {e}") from e

    async def screenshot(self, path: str | None = None) -> bytes:
        """Capture screenshot. Returns bytes, optionally saves to path.

        Raises:
            RuntimeError: If browser not launched.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        return await self._page.screenshot(path=path, full_page=True)

    async def html(self) -> str:
        """Get full page HTML.

        Raises:
            RuntimeError: If browser not launched.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        return await self._page.content()

    async def url(self) -> str:
        """Get current URL.

        Raises:
            RuntimeError: If browser not launched.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        return self._page.url

    async def text_content(self) -> str:
        """Get visible text content of the page body.

        Raises:
            RuntimeError: If browser not launched.
        """
        if not self._page:
            raise RuntimeError("Browser not launched")
        return await self._page.inner_text("body")

    async def close(self) -> None:
        """Close browser and clean up resources."""
        if self._browser:
            await self._browser.close()
        if self._playwright:
            await self._playwright.stop()

        self._browser = None
        self._page = None
        self._playwright = None
        self._inflight.clear()
