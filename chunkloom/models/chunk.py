"""Chunk model for editable, retrievable segments of a source document."""

from enum import Enum
from typing import Dict, List
from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from chunkloom.config import DEFAULT_WEIGHTS
from chunkloom.normalization import normalize_keyword, split_keyword_entries
from .chunk_link import ChunkLink


class ContextLevel(str, Enum):
    """Scope at which a chunk applies once it is vectorized."""

    GLOBAL = "global"
    CHARACTER = "character"
    CHAT = "chat"


class Chunk(BaseModel):
    """A segment of the source document together with its keyword vocabulary and links.

    Keyword lists keep the text as entered; ``custom_weights`` is keyed by
    normalized keyword text. After construction, weights must only be written
    through ``chunkloom.keywords.set_weight`` so values stay clamped.
    """

    hash: int = Field(description="Stable identity key, unique within the session")
    text: str = Field(default="", description="Editable chunk body")
    section: str = Field(default="", description="Section label used as the heading on reconstruction")
    title: str = Field(default="", description="Display label, kept in sync with section")
    context_level: ContextLevel = Field(default=ContextLevel.CHARACTER, description="Scope the chunk applies at")
    disabled: bool = Field(default=False, description="Disabled chunks are left out of finalization and stats")
    system_keywords: List[str] = Field(default_factory=list, description="Keywords produced by the extractor")
    custom_keywords: List[str] = Field(default_factory=list, description="Keywords added by the user")
    disabled_keywords: List[str] = Field(default_factory=list, description="Keywords suppressed by the user")
    custom_weights: Dict[str, int] = Field(default_factory=dict, description="Explicit weights keyed by normalized keyword")
    chunk_links: List[ChunkLink] = Field(default_factory=list, description="Outgoing activation edges in insertion order")
    index: int = Field(default=0, description="Zero-based position in the session")
    original_index: int = Field(default=0, description="Position the chunk was created at; never reindexed")
    tags: List[str] = Field(default_factory=list, description="Free-form labels carried through from the chunker")

    @field_validator("system_keywords", "custom_keywords", "disabled_keywords")
    @classmethod
    def _split_on_commas(cls, value: List[str]) -> List[str]:
        return split_keyword_entries(value)

    @field_validator("custom_weights")
    @classmethod
    def _normalize_weights(cls, value: Dict[str, int], info: ValidationInfo) -> Dict[str, int]:
        """Normalize keys and clamp values; pass ``context={"weights": WeightConfig}`` for a non-default scale."""
        weights = (info.context or {}).get("weights", DEFAULT_WEIGHTS)
        return {normalize_keyword(k): weights.clamp(v) for k, v in value.items() if normalize_keyword(k)}

    @model_validator(mode="after")
    def _drop_invalid_links(self) -> "Chunk":
        seen = set()
        links = []
        for link in self.chunk_links:
            if link.target_hash == self.hash or link.target_hash in seen:
                continue
            seen.add(link.target_hash)
            links.append(link)
        self.chunk_links = links
        return self

    @property
    def all_keywords(self) -> List[str]:
        """System keywords followed by custom keywords, duplicates (by normalized text) dropped."""
        seen = set()
        keywords = []
        for keyword in [*self.system_keywords, *self.custom_keywords]:
            normalized = normalize_keyword(keyword)
            if normalized in seen:
                continue
            seen.add(normalized)
            keywords.append(keyword)
        return keywords

    @property
    def active_keywords(self) -> List[str]:
        """Keywords in use, i.e. ``all_keywords`` minus the disabled ones."""
        disabled = {normalize_keyword(k) for k in self.disabled_keywords}
        return [k for k in self.all_keywords if normalize_keyword(k) not in disabled]

    @property
    def char_count(self) -> int:
        return len(self.text)
