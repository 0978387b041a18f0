"""Collaborator fakes shared by the tests."""

import asyncio
from typing import Any, Dict, List, Optional

from chunkloom.models.chunk import ContextLevel
from chunkloom.models.finalization import VectorizeOutcome


def raw_chunks(*sections: str) -> List[Dict[str, Any]]:
    """Chunker output with one chunk per section name."""
    return [
        {
            "text": f"{section} text body.",
            "metadata": {"section": section, "keywords": [section.lower(), "shared"], "tags": ["sheet"]},
        }
        for section in sections
    ]


class StaticChunker:
    """Chunker returning a fixed list and counting calls."""

    def __init__(self, chunks: List[Dict[str, Any]]):
        self.chunks = chunks
        self.calls = 0

    def chunk(self, document: str, subject_name: str):
        self.calls += 1
        return list(self.chunks)


class RecordingVectorizer:
    """Vectorizer that records every call and returns a preset outcome."""

    def __init__(self, outcome: Optional[VectorizeOutcome] = None, error: Optional[Exception] = None):
        self.outcome = outcome or VectorizeOutcome.success()
        self.error = error
        self.calls = []

    async def vectorize(self, subject_name: str, document_text: str, context_level: ContextLevel):
        self.calls.append((subject_name, document_text, context_level))
        if self.error is not None:
            raise self.error
        return self.outcome


class GatedVectorizer(RecordingVectorizer):
    """Vectorizer that blocks until ``release`` is set, for in-flight tests."""

    def __init__(self):
        super().__init__()
        self.release = asyncio.Event()
        self.started = asyncio.Event()

    async def vectorize(self, subject_name: str, document_text: str, context_level: ContextLevel):
        self.calls.append((subject_name, document_text, context_level))
        self.started.set()
        await self.release.wait()
        return self.outcome


class StaticExtractor:
    """Keyword extractor returning a fixed list, optionally raising instead."""

    def __init__(self, keywords: List[str], error: Optional[Exception] = None):
        self.keywords = keywords
        self.error = error
        self.calls = []

    async def extract(self, chunk_text: str, subject_name: str) -> List[str]:
        self.calls.append((chunk_text, subject_name))
        if self.error is not None:
            raise self.error
        return list(self.keywords)
