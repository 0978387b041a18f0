"""Chunk link model for directed activation edges between chunks."""

from enum import Enum
from pydantic import BaseModel, Field


class LinkMode(str, Enum):
    """How strongly a linked chunk is pulled in when its source is active."""

    SOFT = "soft"
    FORCE = "force"


class ChunkLink(BaseModel):
    """Outgoing edge from a chunk to another chunk in the same session."""

    target_hash: int = Field(description="Hash of the chunk this edge activates")
    mode: LinkMode = Field(default=LinkMode.SOFT, description="soft = retrieval boost, force = mandatory co-inclusion")
