"""Data models for the Omnivore MCP Server."""

from dataclasses import dataclass
from enum import Enum


class PageType(str, Enum):
    ARTICLE = "ARTICLE"
    BOOK = "BOOK"
    FILE = "FILE"
    PROFILE = "PROFILE"
    UNKNOWN = "UNKNOWN"
    WEBSITE = "WEBSITE"
    HIGHLIGHTS = "HIGHLIGHTS"

    @classmethod
    def parse(cls, value: str | None) -> "PageType":
        """Map a wire value to a PageType, falling back to UNKNOWN."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class HighlightType(str, Enum):
    HIGHLIGHT = "HIGHLIGHT"
    NOTE = "NOTE"
    REDACTION = "REDACTION"

    @classmethod
    def parse(cls, value: str | None) -> "HighlightType":
        try:
            return cls(value)
        except ValueError:
            return cls.HIGHLIGHT


class UpdateReason(str, Enum):
    """Why a slug shows up in the updates-since feed."""

    CREATED = "CREATED"
    UPDATED = "UPDATED"
    DELETED = "DELETED"


@dataclass(frozen=True)
class Label:
    name: str

    def to_dict(self) -> dict:
        return {"name": self.name}


@dataclass(frozen=True)
class Highlight:
    """A highlight, note or redaction attached to an article.

    ``patch`` is kept as the opaque string the API returns; see
    :func:`omnivore_mcp.highlights.decode_patch` for its interpretation.
    """

    id: str
    quote: str
    annotation: str
    patch: str
    updated_at: str
    labels: list[Label] | None = None
    type: HighlightType = HighlightType.HIGHLIGHT

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "quote": self.quote,
            "annotation": self.annotation,
            "patch": self.patch,
            "updated_at": self.updated_at,
            "labels": [label.to_dict() for label in self.labels] if self.labels is not None else None,
            "type": self.type.value,
        }


@dataclass(frozen=True)
class HighlightPoint:
    """Top-left corner of a highlight's bounding box in a rendered file."""

    left: float
    top: float


@dataclass(frozen=True)
class Article:
    """An article saved in Omnivore.

    Timestamps are kept as the strings the API sends. ``labels``,
    ``highlights``, ``content`` and ``published_at`` are ``None`` when the
    query did not ask for them or the server omitted them.
    """

    title: str
    site_name: str
    original_article_url: str
    author: str
    description: str
    slug: str
    updated_at: str
    saved_at: str
    page_type: PageType = PageType.UNKNOWN
    url: str = ""
    labels: list[Label] | None = None
    highlights: list[Highlight] | None = None
    content: str | None = None
    published_at: str | None = None

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "site_name": self.site_name,
            "original_article_url": self.original_article_url,
            "url": self.url,
            "author": self.author,
            "description": self.description,
            "slug": self.slug,
            "updated_at": self.updated_at,
            "saved_at": self.saved_at,
            "page_type": self.page_type.value,
            "labels": [label.to_dict() for label in self.labels] if self.labels is not None else None,
            "highlights": (
                [h.to_dict() for h in self.highlights] if self.highlights is not None else None
            ),
            "content": self.content,
            "published_at": self.published_at,
        }
