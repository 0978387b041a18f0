"""Exceptions surfaced to callers of the chunk session and finalization pipeline."""


class ChunkLoomError(Exception):
    """Base class for errors raised by chunkloom."""


class NoEnabledChunksError(ChunkLoomError):
    """Finalize was requested while every chunk is disabled (or none exist)."""

    def __init__(self, message: str = "No chunks enabled. Enable at least one chunk."):
        super().__init__(message)


class FinalizationInProgressError(ChunkLoomError):
    """A finalize call is already outstanding for this pipeline."""

    def __init__(self, message: str = "Finalization already in progress."):
        super().__init__(message)


class VectorizationError(ChunkLoomError):
    """The vectorizer raised instead of returning an outcome."""


class KeywordExtractionError(ChunkLoomError):
    """The keyword extractor failed while regenerating a chunk's keywords."""


class SessionClosedError(ChunkLoomError):
    """A structural mutation was attempted on a session that has been closed."""
