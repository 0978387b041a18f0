"""Models describing a finalization run and the vectorizer's answer."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

from .chunk import ContextLevel


class VectorizeStatus(str, Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILURE = "failure"


class VectorizeOutcome(BaseModel):
    """What the vectorizer reports for one submitted document."""

    status: VectorizeStatus = Field(description="success, skipped (e.g. already vectorized) or failure")
    reason: Optional[str] = Field(default=None, description="Explanation for skipped or failed outcomes")

    @classmethod
    def success(cls) -> "VectorizeOutcome":
        return cls(status=VectorizeStatus.SUCCESS)

    @classmethod
    def skipped(cls, reason: Optional[str] = None) -> "VectorizeOutcome":
        return cls(status=VectorizeStatus.SKIPPED, reason=reason)

    @classmethod
    def failure(cls, reason: str) -> "VectorizeOutcome":
        return cls(status=VectorizeStatus.FAILURE, reason=reason)


class ReconstructedDocument(BaseModel):
    """The document rebuilt from the enabled chunks, ready for vectorization."""

    subject_name: str = Field(description="Name the document is vectorized under")
    collection_id: str = Field(description="Sanitized collection name derived from subject_name")
    context_level: ContextLevel = Field(description="Scope the vectorized chunks apply at")
    text: str = Field(description="Reconstructed document text")
    chunk_count: int = Field(description="Number of enabled chunks in the document")
    chunk_hashes: List[int] = Field(default_factory=list, description="Hashes of the chunks used, in index order")


class FinalizationResult(BaseModel):
    """Outcome of one finalize call."""

    document: ReconstructedDocument
    outcome: VectorizeOutcome

    @property
    def succeeded(self) -> bool:
        return self.outcome.status == VectorizeStatus.SUCCESS

    @property
    def skipped(self) -> bool:
        return self.outcome.status == VectorizeStatus.SKIPPED

    @property
    def failed(self) -> bool:
        return self.outcome.status == VectorizeStatus.FAILURE
