"""Omnivore MCP Server — GraphQL client for saved articles and highlights."""

from .client import OmnivoreAPIError, OmnivoreClient, OmnivoreError, ResponseShapeError
from .highlights import compare_highlights_in_file, get_highlight_location, get_highlight_point
from .models import Article, Highlight, HighlightPoint, Label, PageType
from .server import main

__all__ = [
    "main",
    "OmnivoreClient",
    "OmnivoreError",
    "OmnivoreAPIError",
    "ResponseShapeError",
    "Article",
    "Highlight",
    "HighlightPoint",
    "Label",
    "PageType",
    "compare_highlights_in_file",
    "get_highlight_location",
    "get_highlight_point",
]

__version__ = "0.1.0"
