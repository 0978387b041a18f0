"""Ordered, in-memory store of the chunks in one editing session."""

import math
import time
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union
from loguru import logger

from chunkloom.link_graph import LinkGraph
from chunkloom.models.chunk import Chunk, ContextLevel
from chunkloom.models.chunk_link import LinkMode
from chunkloom.models.raw_chunk import RawChunk
from chunkloom.models.session_stats import SessionStats
from chunkloom.normalization import split_keyword_entries

NEW_CHUNK_SECTION = "New Chunk"

# Fields that update() may write. title and section are kept in sync.
EDITABLE_FIELDS = ("text", "title", "section", "context_level", "disabled", "tags")


def _round_half_up(value: float) -> int:
    """Round .5 upwards, unlike the built-in round()."""
    return int(math.floor(value + 0.5))


class ChunkStore:
    """Single source of truth for the chunks of a session and their order.

    Operations addressed by an unknown hash are no-ops: background work may
    still hold the hash of a chunk that was deleted in the meantime.
    """

    def __init__(self, clock=None):
        """
        Initialize an empty store.

        Args:
            clock: Callable returning the current time in milliseconds; used to mint hashes.
        """
        self._chunks: List[Chunk] = []
        self._clock = clock or (lambda: time.time_ns() // 1_000_000)
        self._last_minted = 0
        self.links = LinkGraph(self)

    def __len__(self) -> int:
        return len(self._chunks)

    def __iter__(self) -> Iterator[Chunk]:
        return iter(list(self._chunks))

    def __contains__(self, chunk_hash: object) -> bool:
        return self.get(chunk_hash) is not None

    @property
    def chunks(self) -> List[Chunk]:
        """Chunks in index order (a copy of the list, not of the chunks)."""
        return list(self._chunks)

    @property
    def hashes(self) -> List[int]:
        return [chunk.hash for chunk in self._chunks]

    def get(self, chunk_hash) -> Optional[Chunk]:
        for chunk in self._chunks:
            if chunk.hash == chunk_hash:
                return chunk
        return None

    def mint_hash(self) -> int:
        """Return a new hash from the clock, bumped past earlier hashes and existing chunks."""
        candidate = max(self._clock(), self._last_minted + 1)
        taken = set(self.hashes)
        while candidate in taken:
            candidate += 1
        self._last_minted = candidate
        return candidate

    def ingest(self, raw_chunks: Sequence[Union[RawChunk, Dict[str, Any]]]) -> List[Chunk]:
        """
        Replace the session's chunks with the chunker's output.

        Args:
            raw_chunks: Chunker output, as RawChunk models or plain dicts of the same shape.

        Returns:
            The new chunks in index order.
        """
        self._chunks = []
        for index, raw in enumerate(raw_chunks):
            raw = raw if isinstance(raw, RawChunk) else RawChunk.model_validate(raw)
            chunk_hash = raw.hash
            if chunk_hash is None or chunk_hash in self:
                if chunk_hash is not None:
                    logger.warning(f"Duplicate chunk hash {chunk_hash} at index {index}; minting a new one")
                chunk_hash = self.mint_hash()
            section = raw.metadata.section or f"Chunk {index + 1}"
            self._chunks.append(
                Chunk(
                    hash=chunk_hash,
                    text=raw.text,
                    section=section,
                    title=section,
                    system_keywords=list(raw.metadata.keywords),
                    tags=list(raw.metadata.tags),
                    index=index,
                    original_index=index,
                )
            )
        logger.debug(f"Ingested {len(self._chunks)} chunks")
        return self.chunks

    def add(self, section: str = NEW_CHUNK_SECTION,
            context_level: ContextLevel = ContextLevel.CHARACTER) -> Chunk:
        """Append an empty chunk with a fresh hash and return it."""
        position = len(self._chunks)
        chunk = Chunk(
            hash=self.mint_hash(),
            text="",
            section=section,
            title=section,
            context_level=context_level,
            index=position,
            original_index=position,
        )
        self._chunks.append(chunk)
        logger.debug(f"Added chunk {chunk.hash} at index {position}")
        return chunk

    def remove(self, chunk_hash) -> Optional[Chunk]:
        """Delete a chunk, reindex the rest and prune links pointing at it. Returns the removed chunk."""
        chunk = self.get(chunk_hash)
        if chunk is None:
            logger.debug(f"remove: unknown chunk {chunk_hash}, ignoring")
            return None
        self._chunks = [c for c in self._chunks if c.hash != chunk_hash]
        self.reindex()
        self.links.prune_references_to(chunk_hash)
        return chunk

    def reindex(self) -> None:
        for position, chunk in enumerate(self._chunks):
            chunk.index = position

    def update(self, chunk_hash, field: str, value: Any) -> Optional[Chunk]:
        """
        Apply a field-level edit.

        Args:
            chunk_hash: Chunk to edit; unknown hashes are ignored.
            field: One of EDITABLE_FIELDS. Editing title or section writes both.
            value: New value; context_level accepts the enum or its string value,
                unknown levels leave the chunk unchanged.

        Returns:
            The edited chunk, or None if the hash is unknown.

        Raises:
            ValueError: If ``field`` is not editable.
        """
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Field '{field}' is not editable; expected one of {EDITABLE_FIELDS}")
        chunk = self.get(chunk_hash)
        if chunk is None:
            logger.debug(f"update: unknown chunk {chunk_hash}, ignoring '{field}' edit")
            return None

        if field in ("title", "section"):
            label = str(value or "")
            chunk.title = label
            chunk.section = label
        elif field == "context_level":
            try:
                chunk.context_level = ContextLevel(value)
            except ValueError:
                logger.debug(f"update: unknown context level {value!r} for chunk {chunk_hash}, ignoring")
        elif field == "disabled":
            chunk.disabled = bool(value)
        elif field == "tags":
            chunk.tags = list(value or [])
        else:
            chunk.text = str(value or "")
        return chunk

    def toggle_enabled(self, chunk_hash) -> Optional[bool]:
        """Flip the disabled flag. Returns the new ``disabled`` value, or None for unknown hashes."""
        chunk = self.get(chunk_hash)
        if chunk is None:
            return None
        chunk.disabled = not chunk.disabled
        return chunk.disabled

    def regenerate(self, chunk_hash, keywords: Sequence[str]) -> Optional[Chunk]:
        """Replace the extracted keywords of a chunk; user customization is left untouched."""
        chunk = self.get(chunk_hash)
        if chunk is None:
            logger.debug(f"regenerate: chunk {chunk_hash} no longer exists, discarding keywords")
            return None
        chunk.system_keywords = split_keyword_entries(keywords)
        return chunk

    def enabled_chunks(self) -> List[Chunk]:
        return [chunk for chunk in sorted(self._chunks, key=lambda c: c.index) if not chunk.disabled]

    def statistics(self) -> SessionStats:
        """Counts and sizes for the stats bar; sizes cover enabled chunks only."""
        enabled = self.enabled_chunks()
        total_chars = sum(chunk.char_count for chunk in enabled)
        edges = self.links.edges()
        return SessionStats(
            total_chunks=len(self._chunks),
            enabled_chunks=len(enabled),
            total_chars=total_chars,
            average_chars=_round_half_up(total_chars / len(enabled)) if enabled else 0,
            link_count=len(edges),
            force_link_count=sum(1 for _, _, mode in edges if mode == LinkMode.FORCE),
        )

    def clear(self) -> None:
        self._chunks = []
