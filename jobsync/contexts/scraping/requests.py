"""HTTP fetching for the listing page."""

from typing import Optional

import requests
from loguru import logger

from jobsync.config import FetchConfig
from jobsync.exceptions import FetchError

PermanentCodeSet = (401, 403, 404, 410)

PermanentErrorTypes = (requests.exceptions.InvalidURL, requests.exceptions.TooManyRedirects)

LINK_GOOD = "success"
LINK_BAD = "failure"
LINK_UNKNOWN = "transient failure"


def classify_http_outcome(
    exception: Optional[requests.RequestException] = None,
    response: Optional[requests.Response] = None,
) -> str:
    if response is None and exception is not None:
        response = getattr(exception, "response", None)

    if response is not None: # We received a response object.
        status = response.status_code
        if 200 <= status < 300:
            return LINK_GOOD
        elif status in PermanentCodeSet:
            return LINK_BAD
        else:
            return LINK_UNKNOWN

    elif exception is not None: # No response, only an exception.
        if isinstance(exception, PermanentErrorTypes):
            return LINK_BAD
        else:
            return LINK_UNKNOWN
    else:
        # We received nothing. We know nothing about the link.
        return LINK_UNKNOWN


class PageFetcher:
    """
    Single-attempt GET of the listing page.

    There is no retry here; the next scheduled run is the retry boundary.
    """

    def __init__(self, config: FetchConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    @property
    def headers(self) -> dict:
        return {"User-Agent": self.config.user_agent}

    def fetch(self, url: Optional[str] = None) -> str:
        """
        Fetch a page and return its HTML.

        Args:
            url: Page to fetch (default: the configured scrape URL)

        Returns:
            Response body as text

        Raises:
            FetchError: On timeout, connection failure, or non-2xx status
        """
        url = url or self.config.url
        logger.debug(f"GET {url} (timeout={self.config.timeout}s)")

        try:
            response = self.session.get(url, headers=self.headers, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.Timeout as e:
            raise FetchError(
                f"Request to {url} timed out after {self.config.timeout}s: {e}",
                url=url,
                classification=classify_http_outcome(exception=e),
            ) from e
        except requests.RequestException as e:
            raise FetchError(
                f"Request to {url} failed: {e}",
                url=url,
                classification=classify_http_outcome(exception=e),
            ) from e

        return response.text
