"""Raw chunk model for the output of the external chunker."""

from typing import List, Optional
from pydantic import BaseModel, Field


class RawChunkMetadata(BaseModel):
    """Metadata the chunker attaches to each chunk."""

    section: Optional[str] = Field(default=None, description="Section heading the chunk came from")
    keywords: List[str] = Field(default_factory=list, description="Keywords extracted for the chunk")
    tags: List[str] = Field(default_factory=list, description="Classification tags found in the chunk")

    model_config = {"extra": "allow"}


class RawChunk(BaseModel):
    """One chunk as produced by the chunker, before it joins an editing session."""

    text: str = Field(description="Chunk text content")
    metadata: RawChunkMetadata = Field(default_factory=RawChunkMetadata, description="Chunker metadata")
    hash: Optional[int] = Field(default=None, description="Upstream hash, reused when unique")
