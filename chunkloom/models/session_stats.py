"""Session statistics model."""

from pydantic import BaseModel, Field


class SessionStats(BaseModel):
    """Summary numbers for an editing session; sizes count enabled chunks only."""

    total_chunks: int = Field(description="All chunks in the session, enabled or not")
    enabled_chunks: int = Field(description="Chunks that will be finalized")
    total_chars: int = Field(description="Characters across enabled chunks")
    average_chars: int = Field(description="Rounded mean characters per enabled chunk")
    link_count: int = Field(default=0, description="Outgoing links across all chunks")
    force_link_count: int = Field(default=0, description="Links in force mode")
