"""Plaintext keyword entry: ``keyword`` or ``keyword:weight`` entries separated by commas."""

import re
from typing import List, Optional
from pydantic import BaseModel, Field

from chunkloom.config import DEFAULT_WEIGHTS, WeightConfig
from chunkloom.keywords import normalize_keyword, resolve_weight, set_weight
from chunkloom.models.chunk import Chunk

ENTRY_SEPARATOR = ","
WEIGHT_SEPARATOR = ":"

_INTEGER_RE = re.compile(r"^[+-]?\d+$")


class ParsedKeyword(BaseModel):
    """One entry of a plaintext keyword list."""

    keyword: str = Field(description="Keyword text as entered, trimmed")
    weight: Optional[int] = Field(default=None, description="Explicit weight, already clamped; None means resolver default")


def format_keywords(chunk: Chunk, weights: WeightConfig = DEFAULT_WEIGHTS) -> str:
    """Serialize every keyword of the chunk as ``keyword:weight`` using its effective weight."""
    return ", ".join(
        f"{keyword}{WEIGHT_SEPARATOR}{resolve_weight(chunk, keyword, weights)}"
        for keyword in chunk.all_keywords
    )


def parse_entry(entry: str, weights: WeightConfig = DEFAULT_WEIGHTS) -> Optional[ParsedKeyword]:
    """
    Parse a single entry.

    The entry is split at its last colon. An integer suffix with a non-empty
    prefix yields that prefix and the clamped weight; anything else keeps the
    whole trimmed entry, colon included, as the keyword.

    Returns:
        ParsedKeyword, or None for a blank entry.
    """
    trimmed = entry.strip()
    if not trimmed:
        return None

    keyword, sep, suffix = trimmed.rpartition(WEIGHT_SEPARATOR)
    keyword = keyword.strip()
    suffix = suffix.strip()
    if sep and keyword and _INTEGER_RE.match(suffix):
        return ParsedKeyword(keyword=keyword, weight=weights.clamp(int(suffix)))
    return ParsedKeyword(keyword=trimmed)


def parse_keywords(text: str, weights: WeightConfig = DEFAULT_WEIGHTS) -> List[ParsedKeyword]:
    """Parse a comma-separated list, skipping blank entries; order is preserved."""
    parsed = []
    for entry in (text or "").split(ENTRY_SEPARATOR):
        item = parse_entry(entry, weights)
        if item is not None:
            parsed.append(item)
    return parsed


def apply_plaintext(chunk: Chunk, text: str, weights: WeightConfig = DEFAULT_WEIGHTS) -> List[ParsedKeyword]:
    """
    Replace the chunk's vocabulary with the keywords listed in ``text``.

    System keywords that are still listed stay system keywords; every other
    listed keyword becomes a custom keyword. Explicit weights are written
    through ``set_weight``; entries without one keep whatever override the
    keyword already had. A repeated keyword keeps its first spelling.

    Args:
        chunk: Chunk to update in place.
        text: Plaintext keyword list.
        weights: Weight scale.

    Returns:
        The parsed entries, duplicates included.
    """
    parsed = parse_keywords(text, weights)

    listed = []
    seen = set()
    for item in parsed:
        normalized = normalize_keyword(item.keyword)
        if item.weight is not None:
            set_weight(chunk, item.keyword, item.weight, weights)
        if normalized in seen:
            continue
        seen.add(normalized)
        listed.append(item.keyword)

    system_set = {normalize_keyword(k) for k in chunk.system_keywords}
    chunk.system_keywords = [k for k in chunk.system_keywords if normalize_keyword(k) in seen]
    chunk.custom_keywords = [k for k in listed if normalize_keyword(k) not in system_set]
    chunk.disabled_keywords = [k for k in chunk.disabled_keywords if normalize_keyword(k) in seen]
    return parsed
