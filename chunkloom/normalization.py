"""Keyword text helpers shared by the models and the resolver."""

from typing import Iterable, List

# Commas separate entries in the plaintext keyword format, so a keyword never contains one.
KEYWORD_SEPARATOR = ","


def normalize_keyword(keyword: str) -> str:
    """Trim and lower-case keyword text; used for every lookup and membership test."""
    return str(keyword or "").strip().lower()


def split_keyword_entries(keywords: Iterable[str]) -> List[str]:
    """Split entries on commas, trim them and drop blanks; order is preserved."""
    cleaned = []
    for keyword in keywords:
        for part in str(keyword or "").split(KEYWORD_SEPARATOR):
            part = part.strip()
            if part:
                cleaned.append(part)
    return cleaned
