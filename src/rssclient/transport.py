"""HTTP transport used to download feed documents."""

import logging
from collections.abc import Mapping

import httpx

from rssclient.errors import TransportError

logger = logging.getLogger(__name__)

VERSION = "0.1.0"
USER_AGENT = f"rssclient/{VERSION}"
DEFAULT_TIMEOUT = 10


class HttpTransport:
    """Fetch a URL with httpx and return its body as text."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, headers: Mapping[str, str] | None = None) -> None:
        self.timeout = timeout
        self.headers = {"User-Agent": USER_AGENT}
        if headers:
            self.headers.update(headers)

    def get(self, url: str, headers: Mapping[str, str] | None = None) -> str:
        request_headers = dict(self.headers)
        if headers:
            request_headers.update(headers)

        logger.debug("GET %s", url)
        try:
            resp = httpx.get(
                url,
                timeout=self.timeout,
                follow_redirects=True,
                headers=request_headers,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise TransportError(f"Error HTTP {status} on request", url=url, status_code=status) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"Request failed: {exc}", url=url) from exc

        # Any status other than 200 is a failed fetch, other 2xx codes included
        if resp.status_code != 200:
            status = resp.status_code
            raise TransportError(f"Error HTTP {status} on request", url=url, status_code=status)
        return resp.text
