"""
Browser capture session.

Drives Chromium through Playwright, loads one page, and records every
network request it issues (with status and response headers when a
response arrives) as a traffic log.
"""

from __future__ import annotations

from playwright import async_api
from skimwatch.config import WaitUntil
from skimwatch.models import browser, traffic
from skimwatch.utils import errors, logger

log = logger.create_logger("BrowserSession")

# Requests beyond this are ignored to bound memory on runaway pages.
MAX_TRACKED_REQUESTS = 5000


class _Capture:
    """Mutable per-request record, frozen into a RequestEntry at the end."""

    __slots__ = ("url", "method", "status", "headers")

    def __init__(self, url: str, method: str) -> None:
        self.url = url
        self.method = method
        self.status: int | None = None
        self.headers: tuple[tuple[str, str], ...] = ()

    def freeze(self) -> traffic.RequestEntry:
        return traffic.RequestEntry(
            request_url=self.url,
            response_headers=self.headers,
            method=self.method,
            status=self.status,
        )


class BrowserSession:
    """One Chromium instance with a single page whose traffic is recorded.

    Requests are kept in the order the page issues them.  A response is
    paired with the oldest request for the same URL that has not yet
    received one, so repeated fetches of one resource stay distinct.
    """

    def __init__(self, headless: bool = True) -> None:
        self._headless = headless
        self._playwright: async_api.Playwright | None = None
        self._browser: async_api.Browser | None = None
        self._context: async_api.BrowserContext | None = None
        self._page: async_api.Page | None = None

        self._captured: list[_Capture] = []
        # URL -> indices into _captured still waiting for a response
        self._pending_responses: dict[str, list[int]] = {}
        self._limit_logged = False

    def get_traffic_log(self) -> traffic.TrafficLog:
        """Snapshot the requests recorded so far."""
        return traffic.TrafficLog(entries=tuple(c.freeze() for c in self._captured))

    # ==========================================================================
    # Event Handlers
    # ==========================================================================

    def _on_request(self, request: async_api.Request) -> None:
        if len(self._captured) >= MAX_TRACKED_REQUESTS:
            if not self._limit_logged:
                log.warn("Request limit reached; further requests are ignored", {"limit": MAX_TRACKED_REQUESTS})
                self._limit_logged = True
            return
        self._pending_responses.setdefault(request.url, []).append(len(self._captured))
        self._captured.append(_Capture(request.url, request.method))

    def _on_response(self, response: async_api.Response) -> None:
        waiting = self._pending_responses.get(response.url)
        if not waiting:
            return
        capture = self._captured[waiting.pop(0)]
        if not waiting:
            del self._pending_responses[response.url]
        capture.status = response.status
        capture.headers = tuple(response.headers.items())

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    async def launch_browser(self) -> None:
        """Start Playwright, open Chromium and attach the traffic listeners."""
        log.info("Launching browser", {"headless": self._headless})
        self._playwright = await async_api.async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=self._headless)
        self._context = await self._browser.new_context()
        page = await self._context.new_page()
        page.on("request", self._on_request)
        page.on("response", self._on_response)
        self._page = page

    async def navigate_to(
        self,
        url: str,
        wait_until: WaitUntil = "load",
        timeout: int = 30000,
    ) -> browser.NavigationResult:
        """Load *url* in the session page.

        Navigation failures are reported in the result rather than raised;
        an HTTP status of 400 or above also counts as a failure.
        """
        if self._page is None:
            raise RuntimeError("No browser session active")

        log.debug("Navigating", {"url": url, "waitUntil": wait_until, "timeout": timeout})
        try:
            response = await self._page.goto(url, wait_until=wait_until, timeout=timeout)
        except async_api.Error as exc:
            log.warn("Navigation error", {"url": url, "error": str(exc)})
            return browser.NavigationResult.failed(str(exc))

        final_url = self._page.url
        if final_url != url:
            log.info("Redirected", {"from": url, "to": final_url})
        if response is None:
            return browser.NavigationResult(success=True, final_url=final_url)
        return browser.NavigationResult.from_status(response.status, response.status_text, final_url)

    async def close(self) -> None:
        """Tear down page, context, browser and Playwright, in that order."""
        if self._page is not None:
            self._page.remove_listener("request", self._on_request)
            self._page.remove_listener("response", self._on_response)
            self._page = None

        for name, closable in (("context", self._context), ("browser", self._browser)):
            if closable is None:
                continue
            try:
                await closable.close()
            except async_api.Error as exc:
                log.debug(f"Ignoring {name} close error", {"error": str(exc)})
        self._context = None
        self._browser = None

        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        log.debug("Browser session closed")


async def capture_traffic(
    url: str,
    *,
    headless: bool = True,
    wait_until: WaitUntil = "load",
    timeout: int = 30000,
) -> traffic.TrafficLog:
    """Load *url* in a fresh browser and return the traffic it generated.

    Raises:
        AcquisitionError: If the browser cannot start or the page fails to load.
    """
    session = BrowserSession(headless=headless)
    log.start_timer("capture")
    try:
        try:
            await session.launch_browser()
        except async_api.Error as exc:
            raise errors.AcquisitionError(f"Could not launch the browser: {exc}") from exc
        result = await session.navigate_to(url, wait_until=wait_until, timeout=timeout)
        if not result.success:
            raise errors.AcquisitionError(f"Could not load {url}: {result.error_message}")
        traffic_log = session.get_traffic_log()
    finally:
        await session.close()
    log.end_timer("capture", "Page captured")
    log.info("Requests captured", {"requests": len(traffic_log)})
    return traffic_log
