"""Retrieval of the organization page and extraction of repository names."""

from __future__ import annotations

from html.parser import HTMLParser

import httpx
import structlog

from omnibox.config import FetcherSettings
from omnibox.errors import ErrorCode, OmniboxError

log = structlog.get_logger()

USER_AGENT = "omnibox/0.1"


def build_http_client(settings: FetcherSettings | None = None) -> httpx.AsyncClient:
    """Shared client for organization page requests."""
    settings = settings or FetcherSettings()
    return httpx.AsyncClient(
        follow_redirects=True,
        max_redirects=settings.max_redirects,
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers={"User-Agent": USER_AGENT, "Accept": "text/html"},
    )


class _RepositoryLinkParser(HTMLParser):
    """Collects the text of every ``<a>`` nested inside an ``<h3>``."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.names: list[str] = []
        self._h3_depth = 0
        self._link: list[str] | None = None

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag == "h3":
            self._h3_depth += 1
        elif tag == "a" and self._h3_depth:
            self._link = []

    def handle_endtag(self, tag: str) -> None:
        if tag == "a" and self._link is not None:
            name = "".join(self._link).strip()
            if name:
                self.names.append(name)
            self._link = None
        elif tag == "h3" and self._h3_depth:
            self._h3_depth -= 1

    def handle_data(self, data: str) -> None:
        if self._link is not None:
            self._link.append(data)


def extract_repository_names(html: str) -> list[str]:
    """Return repository names listed on an organization page, in page order."""
    parser = _RepositoryLinkParser()
    parser.feed(html)
    parser.close()
    return parser.names


class Fetcher:
    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch_repository_names(self, url: str) -> list[str]:
        """Fetch ``url`` and scrape repository names from it.

        Raises ``OmniboxError`` on network failures and non-2xx responses.
        """
        try:
            response = await self._client.get(url)
        except httpx.InvalidURL as exc:
            log.warning("repository_fetch_failed", url=url, error=str(exc))
            raise OmniboxError(
                ErrorCode.FETCH_FAILED,
                f"Invalid organization URL {url!r}: {exc}",
                recoverable=False,
            ) from exc
        except httpx.HTTPError as exc:
            log.warning("repository_fetch_failed", url=url, error=str(exc))
            raise OmniboxError(
                ErrorCode.FETCH_FAILED,
                f"Could not reach {url}: {exc}",
                recoverable=True,
            ) from exc

        if response.status_code == 404:
            raise OmniboxError(
                ErrorCode.PAGE_NOT_FOUND,
                f"Organization page not found: {url}",
                recoverable=False,
            )
        if not response.is_success:
            log.warning("repository_fetch_failed", url=url, status_code=response.status_code)
            raise OmniboxError(
                ErrorCode.FETCH_FAILED,
                f"Organization page returned HTTP {response.status_code}",
                recoverable=True,
            )

        names = extract_repository_names(response.text)
        log.debug("repository_fetch_complete", url=url, count=len(names))
        return names
