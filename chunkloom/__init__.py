"""Chunk knowledge model: editable chunks, keyword weights, activation links and finalization."""

from chunkloom.config import AppConfig, WeightConfig, load_config
from chunkloom.errors import (
    ChunkLoomError,
    FinalizationInProgressError,
    KeywordExtractionError,
    NoEnabledChunksError,
    SessionClosedError,
    VectorizationError,
)
from chunkloom.finalization import FinalizationPipeline, generate_collection_id, reconstruct
from chunkloom.link_graph import LinkGraph
from chunkloom.session import ChunkSession
from chunkloom.store import ChunkStore

__all__ = [
    "AppConfig",
    "ChunkLoomError",
    "ChunkSession",
    "ChunkStore",
    "FinalizationInProgressError",
    "FinalizationPipeline",
    "KeywordExtractionError",
    "LinkGraph",
    "NoEnabledChunksError",
    "SessionClosedError",
    "VectorizationError",
    "WeightConfig",
    "generate_collection_id",
    "load_config",
    "reconstruct",
]
