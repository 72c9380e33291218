"""Connection to the user's logged-in Chrome over CDP."""
import json
import logging
import time
import urllib.request
from typing import Optional

from playwright.sync_api import Browser, BrowserContext, Page, Playwright, sync_playwright

logger = logging.getLogger(__name__)

MAX_BACKOFF_SECONDS = 30
LINKEDIN_HOST = "linkedin.com"


class BrowserConnection:
    """CDP connection with exponential backoff, plus access to the LinkedIn tab.

    The applier drives an existing Chrome session so LinkedIn sees the
    user's own login cookies.
    """

    def __init__(
        self,
        cdp_port: int = 9333,
        max_retries: int = 5,
        retry_delay: float = 2.0,
        timeout: int = 30000,
    ) -> None:
        self.cdp_port = cdp_port
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout = timeout
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    @property
    def endpoint(self) -> str:
        return f"http://127.0.0.1:{self.cdp_port}"

    @property
    def browser(self) -> Browser:
        """Connected browser.

        Raises:
            RuntimeError: If not connected.
        """
        if not self._browser:
            raise RuntimeError("Not connected. Call connect() first.")
        return self._browser

    @property
    def context(self) -> BrowserContext:
        contexts = self.browser.contexts
        return contexts[0] if contexts else self.browser.new_context()

    def _check_cdp_endpoint(self) -> bool:
        try:
            with urllib.request.urlopen(f"{self.endpoint}/json/version", timeout=5) as resp:
                data = json.loads(resp.read().decode())
                logger.debug(f"CDP ready: {data.get('Browser', 'unknown')}")
                return True
        except Exception as e:
            logger.debug(f"CDP not ready: {e}")
            return False

    def connect(self) -> bool:
        """Attach to Chrome, backing off between attempts.

        Returns:
            True if connected.
        """
        for attempt in range(self.max_retries):
            wait_time = min(self.retry_delay * (2**attempt), MAX_BACKOFF_SECONDS)

            if not self._check_cdp_endpoint():
                logger.info(
                    f"Attempt {attempt + 1}/{self.max_retries}: CDP not ready, waiting {wait_time:.1f}s"
                )
                time.sleep(wait_time)
                continue

            try:
                self._playwright = sync_playwright().start()
                self._browser = self._playwright.chromium.connect_over_cdp(self.endpoint)
                logger.info("Connected to Chrome")
                return True
            except Exception as e:
                logger.warning(f"Connection failed: {e}")
                self._cleanup()
                time.sleep(wait_time)

        logger.error("Failed to connect after all retries")
        return False

    def get_page(self) -> Page:
        """An open LinkedIn tab if there is one, else the first tab, else a new one."""
        pages = self.context.pages
        page = next((p for p in pages if LINKEDIN_HOST in p.url), None)
        if page is None:
            page = pages[0] if pages else self.context.new_page()
        page.set_default_timeout(self.timeout)
        return page

    def _cleanup(self) -> None:
        if self._playwright:
            try:
                self._playwright.stop()
            except Exception as e:
                logger.debug(f"Playwright stop failed: {e}")
        self._playwright = None
        self._browser = None

    def disconnect(self) -> None:
        logger.info("Disconnecting from Chrome")
        self._cleanup()
