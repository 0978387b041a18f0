"""Keyword normalization and weight resolution for chunk vocabularies.

Weights resolve in this order:

1. an explicit override in ``chunk.custom_weights`` (stored clamped),
2. the custom-keyword default for keywords the user added,
3. the baseline default for everything else (extracted keywords).
"""

from typing import List, Optional, Tuple
from loguru import logger

from chunkloom.config import DEFAULT_WEIGHTS, WeightConfig
from chunkloom.models.chunk import Chunk
from chunkloom.normalization import KEYWORD_SEPARATOR, normalize_keyword


def _custom_keyword_set(chunk: Chunk) -> set:
    return {normalize_keyword(k) for k in chunk.custom_keywords}


def resolve_weight(chunk: Chunk, keyword: str, weights: WeightConfig = DEFAULT_WEIGHTS) -> int:
    """
    Resolve the effective weight of a keyword within a chunk.

    Args:
        chunk: Chunk owning the keyword.
        keyword: Keyword text, in any case or padding.
        weights: Weight scale; defaults to the built-in 1..200 scale.

    Returns:
        The explicit override if one exists, else the custom or baseline default.
    """
    normalized = normalize_keyword(keyword)
    explicit = chunk.custom_weights.get(normalized)
    if explicit is not None:
        return explicit
    if normalized in _custom_keyword_set(chunk):
        return weights.custom_keyword_weight
    return weights.default_weight


def set_weight(chunk: Chunk, keyword: str, requested: int, weights: WeightConfig = DEFAULT_WEIGHTS) -> int:
    """Clamp ``requested`` into range, store it under the normalized keyword and return the stored value."""
    normalized = normalize_keyword(keyword)
    stored = weights.clamp(requested)
    if stored != requested:
        logger.debug(f"Clamped weight for '{normalized}' in chunk {chunk.hash}: {requested} -> {stored}")
    chunk.custom_weights[normalized] = stored
    return stored


def clear_weight(chunk: Chunk, keyword: str) -> None:
    """Drop an explicit override so the keyword falls back to its default."""
    chunk.custom_weights.pop(normalize_keyword(keyword), None)


def ranked_keywords(chunk: Chunk, weights: WeightConfig = DEFAULT_WEIGHTS) -> List[Tuple[str, int]]:
    """Active keywords with their weights, heaviest first; ties keep insertion order."""
    scored = [(keyword, resolve_weight(chunk, keyword, weights)) for keyword in chunk.active_keywords]
    return sorted(scored, key=lambda item: item[1], reverse=True)


def keyword_preview(
    chunk: Chunk,
    limit: int = 5,
    weights: WeightConfig = DEFAULT_WEIGHTS,
) -> Tuple[List[Tuple[str, int]], int]:
    """
    Top keywords for a collapsed chunk preview.

    Returns:
        Tuple of (top ``limit`` ranked keywords, number of keywords not shown).
    """
    ranked = ranked_keywords(chunk, weights)
    return ranked[:limit], max(0, len(ranked) - limit)


def has_keyword(chunk: Chunk, keyword: str) -> bool:
    normalized = normalize_keyword(keyword)
    return any(normalize_keyword(k) == normalized for k in chunk.all_keywords)


def add_custom_keyword(chunk: Chunk, keyword: str, weight: Optional[int] = None,
                       weights: WeightConfig = DEFAULT_WEIGHTS) -> bool:
    """
    Add a user keyword to the chunk.

    Args:
        chunk: Chunk to edit.
        keyword: Keyword text; surrounding whitespace is trimmed.
        weight: Optional explicit weight, clamped like any other write.
        weights: Weight scale.

    Returns:
        True if the keyword was added, False if it was blank, contained a comma
        or was already in the vocabulary.
    """
    text = str(keyword or "").strip()
    if not text:
        return False
    if KEYWORD_SEPARATOR in text:
        logger.debug(f"add_custom_keyword: refusing '{text}', keywords cannot contain commas")
        return False
    if weight is not None:
        set_weight(chunk, text, weight, weights)
    if has_keyword(chunk, text):
        return False
    chunk.custom_keywords.append(text)
    return True


def remove_keyword(chunk: Chunk, keyword: str) -> bool:
    """Remove a keyword from both vocabularies, together with its override and disabled flag."""
    normalized = normalize_keyword(keyword)
    before = len(chunk.system_keywords) + len(chunk.custom_keywords)
    chunk.system_keywords = [k for k in chunk.system_keywords if normalize_keyword(k) != normalized]
    chunk.custom_keywords = [k for k in chunk.custom_keywords if normalize_keyword(k) != normalized]
    chunk.disabled_keywords = [k for k in chunk.disabled_keywords if normalize_keyword(k) != normalized]
    chunk.custom_weights.pop(normalized, None)
    return len(chunk.system_keywords) + len(chunk.custom_keywords) < before


def disable_keyword(chunk: Chunk, keyword: str) -> bool:
    """Suppress a keyword of the chunk's vocabulary. Unknown or already disabled keywords are ignored."""
    normalized = normalize_keyword(keyword)
    if not has_keyword(chunk, keyword):
        return False
    if any(normalize_keyword(k) == normalized for k in chunk.disabled_keywords):
        return False
    chunk.disabled_keywords.append(normalized)
    return True


def enable_keyword(chunk: Chunk, keyword: str) -> bool:
    normalized = normalize_keyword(keyword)
    remaining = [k for k in chunk.disabled_keywords if normalize_keyword(k) != normalized]
    changed = len(remaining) != len(chunk.disabled_keywords)
    chunk.disabled_keywords = remaining
    return changed
