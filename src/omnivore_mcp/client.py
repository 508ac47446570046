"""Omnivore API client using the GraphQL endpoint."""

import logging
from typing import Any

import httpx

from .config import Config
from .models import Article, Highlight, HighlightType, Label, PageType, UpdateReason
from .queries import (
    DEFAULT_SINCE,
    GET_ARTICLE,
    SEARCH,
    UPDATES_SINCE,
    USERNAME,
    build_request,
    build_search_query,
)

logger = logging.getLogger(__name__)


class OmnivoreClient:
    """Async client for the Omnivore GraphQL API.

    Every fetch is a single POST; pagination, retries and caching are left
    to the caller. Create once and reuse, then call :meth:`aclose`.
    """

    def __init__(self, config: Config):
        self._config = config
        self.endpoint = config.omnivore_endpoint
        self._client = httpx.AsyncClient(
            timeout=config.omnivore_timeout,
            follow_redirects=True,
        )

    def _request_headers(self) -> dict[str, str]:
        """Headers for every request. The API key is sent verbatim."""
        return {
            "Content-Type": "application/json",
            "authorization": self._config.omnivore_api_key.get_secret_value(),
            "X-OmnivoreClient": self._config.omnivore_client_name,
        }

    async def _post(self, document: str, variables: dict[str, Any]) -> dict:
        """POST a GraphQL document and return the decoded JSON body."""
        logger.debug("POST %s variables=%s", self.endpoint, variables)
        response = await self._client.post(
            self.endpoint,
            headers=self._request_headers(),
            json=build_request(document, variables),
        )
        response.raise_for_status()

        payload = response.json()
        if isinstance(payload, dict) and payload.get("errors") and not payload.get("data"):
            messages = [e.get("message", str(e)) for e in payload["errors"] if isinstance(e, dict)]
            raise OmnivoreAPIError(messages)
        return payload

    async def load_article(self, slug: str) -> Article:
        """Fetch a single article by slug.

        Only a reduced field set is requested: savedAt, highlight
        id/quote/annotation and label names. Other fields come back empty.

        Raises:
            OmnivoreAPIError: If the server answers with an ArticleError
            ResponseShapeError: If the response lacks data.article.article
        """
        payload = await self._post(GET_ARTICLE, {"username": USERNAME, "slug": slug})
        result = _unwrap(payload, "data", "article")
        item = _unwrap(result, "article")
        return self._parse_article(item)

    async def load_articles(
        self,
        after: int = 0,
        first: int = 10,
        updated_at: str = "",
        query: str = "",
        include_content: bool = False,
        format: str = "html",
    ) -> tuple[list[Article], bool]:
        """Fetch one page of saved articles, oldest saved first.

        Args:
            after: Offset of the page, sent to the API as a string cursor
            first: Page size
            updated_at: Only return articles updated since this date
            query: Extra Omnivore search terms appended to the search string
            include_content: Whether to ask for the article body
            format: Body format when include_content is set

        Returns:
            The articles on this page and whether another page exists
        """
        variables = {
            "after": str(after),
            "first": first,
            "query": build_search_query(updated_at, query),
            "includeContent": include_content,
            "format": format,
        }
        payload = await self._post(SEARCH, variables)
        search = _unwrap(payload, "data", "search")

        articles = [self._parse_article(_unwrap(edge, "node")) for edge in _unwrap(search, "edges")]
        has_next_page = bool(_unwrap(search, "pageInfo", "hasNextPage"))

        logger.info("Retrieved %d articles (has_next_page=%s)", len(articles), has_next_page)
        return articles, has_next_page

    async def load_deleted_article_slugs(
        self,
        after: int = 0,
        first: int = 10,
        updated_at: str = "",
    ) -> tuple[list[str], bool]:
        """Fetch one page of slugs deleted since ``updated_at``.

        Defaults to everything since 2021-01-01 when no date is given.
        """
        variables = {
            "after": str(after),
            "first": first,
            "since": updated_at or DEFAULT_SINCE,
        }
        payload = await self._post(UPDATES_SINCE, variables)
        updates = _unwrap(payload, "data", "updatesSince")

        slugs = [
            _unwrap(edge, "node", "slug")
            for edge in _unwrap(updates, "edges")
            if edge.get("updateReason") == UpdateReason.DELETED.value
        ]
        has_next_page = bool(_unwrap(updates, "pageInfo", "hasNextPage"))

        logger.info("Retrieved %d deleted slugs (has_next_page=%s)", len(slugs), has_next_page)
        return slugs, has_next_page

    def _parse_article(self, item: dict) -> Article:
        """Parse an Article node into an Article model."""
        highlights = item.get("highlights")
        return Article(
            title=item.get("title") or "",
            site_name=item.get("siteName") or "",
            original_article_url=item.get("originalArticleUrl") or "",
            url=item.get("url") or "",
            author=item.get("author") or "",
            description=item.get("description") or "",
            slug=item.get("slug") or "",
            updated_at=item.get("updatedAt") or "",
            saved_at=item.get("savedAt") or "",
            page_type=PageType.parse(item.get("pageType")),
            labels=self._parse_labels(item.get("labels")),
            highlights=[self._parse_highlight(h) for h in highlights] if highlights is not None else None,
            content=item.get("content"),
            published_at=item.get("publishedAt"),
        )

    def _parse_highlight(self, item: dict) -> Highlight:
        return Highlight(
            id=item.get("id") or "",
            quote=item.get("quote") or "",
            annotation=item.get("annotation") or "",
            patch=item.get("patch") or "",
            updated_at=item.get("updatedAt") or "",
            labels=self._parse_labels(item.get("labels")),
            type=HighlightType.parse(item.get("type")),
        )

    @staticmethod
    def _parse_labels(items: list[dict] | None) -> list[Label] | None:
        if items is None:
            return None
        return [Label(name=item.get("name") or "") for item in items]

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()


def _unwrap(data: Any, *path: str) -> Any:
    """Walk ``path`` through nested response objects.

    A GraphQL error union met along the way raises OmnivoreAPIError with its
    error codes; any other missing key raises ResponseShapeError.
    """
    current = data
    for i, key in enumerate(path):
        if not isinstance(current, dict):
            raise ResponseShapeError(f"Expected an object before {'.'.join(path[: i + 1])}")
        if key not in current:
            if "errorCodes" in current:
                raise OmnivoreAPIError(current["errorCodes"])
            raise ResponseShapeError(f"Missing {'.'.join(path[: i + 1])} in response")
        current = current[key]
    return current


class OmnivoreError(Exception):
    """Base class for errors raised by the Omnivore client."""


class OmnivoreAPIError(OmnivoreError):
    """Raised when the API answers with error codes instead of data."""

    def __init__(self, error_codes: list[str]):
        self.error_codes = list(error_codes)
        super().__init__(f"Omnivore API error: {', '.join(map(str, self.error_codes))}")


class ResponseShapeError(OmnivoreError):
    """Raised when a response does not match the expected envelope."""
