"""Data models for chunks, links, finalization results and statistics."""

from .chunk_link import ChunkLink, LinkMode
from .chunk import Chunk, ContextLevel
from .raw_chunk import RawChunk, RawChunkMetadata
from .finalization import (
    FinalizationResult,
    ReconstructedDocument,
    VectorizeOutcome,
    VectorizeStatus,
)
from .session_stats import SessionStats

__all__ = [
    "Chunk",
    "ChunkLink",
    "ContextLevel",
    "FinalizationResult",
    "LinkMode",
    "RawChunk",
    "RawChunkMetadata",
    "ReconstructedDocument",
    "SessionStats",
    "VectorizeOutcome",
    "VectorizeStatus",
]
