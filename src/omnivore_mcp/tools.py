"""MCP tool definitions for Omnivore.

Each tool does exactly one thing. All exceptions are caught at the
tool boundary and returned as "Error: ..." strings so the MCP protocol
never sees an uncaught exception.
"""

import logging
import re
from datetime import date, datetime

from fastmcp import FastMCP

from .client import OmnivoreClient
from .highlights import sort_highlights
from .models import Article
from .text import format_date, parse_date_time

logger = logging.getLogger(__name__)

_DATE_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _truncate_content(content: str, max_length: int) -> str:
    """Truncate content to max_length at a word boundary."""
    if len(content) <= max_length:
        return content
    return content[:max_length].rsplit(" ", 1)[0] + "..."


def _is_valid_since(value: str) -> bool:
    """Accept YYYY-MM-DD or YYYY-MM-DDTHH:MM[:SS]."""
    if parse_date_time(value) is not None:
        return True
    if not _DATE_SHAPE.fullmatch(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _saved_on(article: Article, date_format: str) -> str | None:
    """Page link for the day the article was saved, if savedAt parses."""
    try:
        saved = datetime.fromisoformat(article.saved_at)
    except ValueError:
        return None
    return format_date(saved, date_format)


def _article_to_dict(article: Article, date_format: str, max_content_length: int) -> dict:
    d = article.to_dict()
    if article.highlights is not None:
        ordered = sort_highlights(article.highlights, article.page_type)
        d["highlights"] = [h.to_dict() for h in ordered]
    if article.content is not None:
        d["content"] = _truncate_content(article.content, max_content_length)
    d["saved_on"] = _saved_on(article, date_format)
    return d


def register_tools(mcp: FastMCP, client: OmnivoreClient, date_format: str = "yyyy-MM-dd") -> None:
    """Register all Omnivore tools on the given MCP server instance."""

    @mcp.tool()
    async def get_article(slug: str) -> str:
        """Get a saved article by slug with its highlights and labels.

        Args:
            slug: Omnivore slug of the article.

        Returns a JSON-formatted article object.
        """
        try:
            article = await client.load_article(slug)
            return str(_article_to_dict(article, date_format, max_content_length=2000))
        except Exception as e:
            logger.error("get_article failed: %s", e, exc_info=True)
            return f"Error: {e}"

    @mcp.tool()
    async def search_articles(
        query: str = "",
        updated_at: str = "",
        after: int = 0,
        first: int = 10,
        include_content: bool = False,
        max_content_length: int = 2000,
    ) -> str:
        """Get one page of saved articles, oldest saved first.

        Args:
            query: Omnivore search terms, e.g. "in:inbox" or "label:reading".
            updated_at: Only articles updated since this time (YYYY-MM-DDTHH:MM[:SS]).
            after: Offset of the page to fetch (default 0).
            first: Page size (default 10).
            include_content: Whether to include the article body.
            max_content_length: Maximum characters of body to return (default 2000).

        Returns a JSON-formatted object with "articles" and "has_next_page".
        Highlights are listed in the order they appear in the document.
        """
        try:
            if updated_at and parse_date_time(updated_at) is None:
                return f"Error: updated_at {updated_at!r} is not YYYY-MM-DDTHH:MM[:SS]"
            articles, has_next_page = await client.load_articles(
                after=after,
                first=first,
                updated_at=updated_at,
                query=query,
                include_content=include_content,
                format="markdown",
            )
            return str(
                {
                    "articles": [
                        _article_to_dict(a, date_format, max_content_length) for a in articles
                    ],
                    "has_next_page": has_next_page,
                }
            )
        except Exception as e:
            logger.error("search_articles failed: %s", e, exc_info=True)
            return f"Error: {e}"

    @mcp.tool()
    async def list_deleted_slugs(updated_at: str = "", after: int = 0, first: int = 10) -> str:
        """List slugs of articles deleted since a date.

        Args:
            updated_at: Only deletions since this date, YYYY-MM-DD or
                YYYY-MM-DDTHH:MM[:SS] (default 2021-01-01).
            after: Offset of the page to fetch (default 0).
            first: Page size (default 10).

        Returns a JSON-formatted object with "slugs" and "has_next_page".
        """
        try:
            if updated_at and not _is_valid_since(updated_at):
                return f"Error: updated_at {updated_at!r} is not YYYY-MM-DD or YYYY-MM-DDTHH:MM[:SS]"
            slugs, has_next_page = await client.load_deleted_article_slugs(
                after=after, first=first, updated_at=updated_at
            )
            return str({"slugs": slugs, "has_next_page": has_next_page})
        except Exception as e:
            logger.error("list_deleted_slugs failed: %s", e, exc_info=True)
            return f"Error: {e}"
