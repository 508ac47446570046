"""Decoding and ordering of highlight positions.

A highlight's ``patch`` is encoded one of two ways depending on the source
document: web articles store a diff-match-patch text patch, files such as
PDFs store JSON with a ``bbox`` of ``[left, top, width, height]``.
:func:`decode_patch` turns the raw string into one of the variants below so
callers never have to guess which encoding they hold.
"""

import json
import logging
import math
from dataclasses import dataclass
from functools import cmp_to_key

from diff_match_patch import diff_match_patch

from .models import Highlight, HighlightPoint, PageType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TextOffset:
    """Character offset of a highlight in a text document."""

    offset: int


@dataclass(frozen=True)
class SpatialBox:
    """Bounding box of a highlight in a rendered file."""

    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class Unrecognized:
    """Patch that matches neither encoding."""


PatchEncoding = TextOffset | SpatialBox | Unrecognized


def _is_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _decode_bbox(data: dict) -> SpatialBox | Unrecognized:
    bbox = data.get("bbox")
    if not isinstance(bbox, list) or len(bbox) != 4 or not all(_is_number(v) for v in bbox):
        return Unrecognized()
    return SpatialBox(*bbox)


def decode_patch(patch: str | None) -> PatchEncoding:
    """Decode a highlight patch. Never raises."""
    if not isinstance(patch, str) or not patch.strip():
        return Unrecognized()

    try:
        data = json.loads(patch)
    except ValueError:
        pass
    else:
        if isinstance(data, dict):
            return _decode_bbox(data)
        return Unrecognized()

    try:
        patches = diff_match_patch().patch_fromText(patch)
    except ValueError:
        logger.debug("Unrecognized highlight patch: %.40r", patch)
        return Unrecognized()
    if not patches:
        return Unrecognized()
    return TextOffset(patches[0].start1 or 0)


def get_highlight_location(patch: str | None) -> int:
    """Start offset of a text patch, 0 when there is none."""
    decoded = decode_patch(patch)
    if isinstance(decoded, TextOffset):
        return decoded.offset
    return 0


def get_highlight_point(patch: str | None) -> HighlightPoint:
    """Top-left corner of a bbox patch, (0, 0) when there is none."""
    decoded = decode_patch(patch)
    if isinstance(decoded, SpatialBox):
        return HighlightPoint(left=decoded.left, top=decoded.top)
    return HighlightPoint(left=0, top=0)


def compare_highlights_in_file(a: Highlight, b: Highlight) -> int:
    """Order highlights as they read on the page: top to bottom, then left to right."""
    point_a = get_highlight_point(a.patch)
    point_b = get_highlight_point(b.patch)
    key_a = (point_a.top, point_a.left)
    key_b = (point_b.top, point_b.left)
    return (key_a > key_b) - (key_a < key_b)


def sort_highlights(highlights: list[Highlight], page_type: PageType) -> list[Highlight]:
    """Return highlights in document order.

    Files are ordered by bounding box, everything else by text offset.
    """
    if page_type == PageType.FILE:
        return sorted(highlights, key=cmp_to_key(compare_highlights_in_file))
    return sorted(highlights, key=lambda h: get_highlight_location(h.patch))
