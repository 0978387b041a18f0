"""Editing session over one source document."""

from typing import List, Optional, Tuple
from loguru import logger

from chunkloom.collaborators import Chunker, KeywordExtractor
from chunkloom.config import DEFAULT_WEIGHTS, WeightConfig
from chunkloom.errors import KeywordExtractionError, SessionClosedError
from chunkloom import keywords, plaintext
from chunkloom.link_graph import LinkGraph
from chunkloom.models.chunk import Chunk, ContextLevel
from chunkloom.store import ChunkStore


class ChunkSession:
    """Everything one editing pass owns: the source document, its chunks and their links.

    Sessions are explicit objects; nothing is shared between two of them. Once
    closed, the chunks are discarded and results of calls still in flight are
    ignored.
    """

    def __init__(
        self,
        subject_name: str,
        source_document: str = "",
        context_level: ContextLevel = ContextLevel.CHARACTER,
        store: Optional[ChunkStore] = None,
        weights: WeightConfig = DEFAULT_WEIGHTS,
    ):
        self.subject_name = subject_name
        self.source_document = source_document
        self.context_level = ContextLevel(context_level)
        self.store = store or ChunkStore()
        self.weights = weights
        self.closed = False
        self.finalizing = False

    @classmethod
    def open(
        cls,
        document: str,
        subject_name: str,
        chunker: Chunker,
        context_level: ContextLevel = ContextLevel.CHARACTER,
        weights: WeightConfig = DEFAULT_WEIGHTS,
    ) -> "ChunkSession":
        """
        Start a session by chunking ``document`` once and ingesting the result.

        Args:
            document: Source document text.
            subject_name: Name the finalized document is vectorized under.
            chunker: Collaborator that splits the document.
            context_level: Session-wide target context level.
            weights: Weight scale every keyword edit in the session uses.

        Returns:
            The new session.
        """
        session = cls(subject_name, source_document=document, context_level=context_level, weights=weights)
        session.store.ingest(chunker.chunk(document, subject_name))
        logger.info(f"Opened session for '{subject_name}' with {len(session.store)} chunks")
        return session

    @property
    def links(self) -> LinkGraph:
        return self.store.links

    @property
    def chunks(self) -> List[Chunk]:
        return self.store.chunks

    def _ensure_open(self) -> None:
        if self.closed:
            raise SessionClosedError(f"Session for '{self.subject_name}' is closed")

    def add_chunk(self) -> Chunk:
        self._ensure_open()
        return self.store.add(context_level=self.context_level)

    def remove_chunk(self, chunk_hash) -> Optional[Chunk]:
        if self.closed:
            return None
        return self.store.remove(chunk_hash)

    # Keyword edits by hash. Unknown hashes are ignored and return None.

    def resolve_weight(self, chunk_hash, keyword: str) -> Optional[int]:
        chunk = self.store.get(chunk_hash)
        return None if chunk is None else keywords.resolve_weight(chunk, keyword, self.weights)

    def set_weight(self, chunk_hash, keyword: str, requested: int) -> Optional[int]:
        chunk = self.store.get(chunk_hash)
        return None if chunk is None else keywords.set_weight(chunk, keyword, requested, self.weights)

    def add_keyword(self, chunk_hash, keyword: str, weight: Optional[int] = None) -> Optional[bool]:
        chunk = self.store.get(chunk_hash)
        return None if chunk is None else keywords.add_custom_keyword(chunk, keyword, weight, self.weights)

    def ranked_keywords(self, chunk_hash) -> List[Tuple[str, int]]:
        chunk = self.store.get(chunk_hash)
        return [] if chunk is None else keywords.ranked_keywords(chunk, self.weights)

    def format_keywords(self, chunk_hash) -> Optional[str]:
        chunk = self.store.get(chunk_hash)
        return None if chunk is None else plaintext.format_keywords(chunk, self.weights)

    def apply_plaintext(self, chunk_hash, text: str) -> Optional[Chunk]:
        """Replace a chunk's vocabulary from a plaintext ``keyword:weight`` list."""
        chunk = self.store.get(chunk_hash)
        if chunk is None:
            return None
        plaintext.apply_plaintext(chunk, text, self.weights)
        return chunk

    def rechunk(self, chunker: Chunker) -> List[Chunk]:
        """Discard all edits and re-run the chunker over the source document."""
        self._ensure_open()
        return self.store.ingest(chunker.chunk(self.source_document, self.subject_name))

    async def refresh_keywords(self, chunk_hash, extractor: KeywordExtractor) -> Optional[Chunk]:
        """
        Re-extract keywords for a chunk's current text.

        The result is applied only if the session is still open and the chunk
        still exists when the extractor returns.

        Returns:
            The updated chunk, or None if the result was discarded.

        Raises:
            KeywordExtractionError: If the extractor fails; the chunk is left as it was.
        """
        chunk = None if self.closed else self.store.get(chunk_hash)
        if chunk is None:
            return None

        try:
            keywords = await extractor.extract(chunk.text, self.subject_name)
        except Exception as e:
            logger.warning(f"Keyword extraction failed for chunk {chunk_hash}: {e}")
            raise KeywordExtractionError(f"Failed to regenerate keywords: {e}") from e

        if self.closed:
            logger.debug(f"Session closed while regenerating chunk {chunk_hash}; result ignored")
            return None
        return self.store.regenerate(chunk_hash, keywords)

    def close(self) -> None:
        """Tear the session down; its chunks are discarded whether or not it was finalized."""
        if self.closed:
            return
        self.store.clear()
        self.closed = True
        logger.debug(f"Closed session for '{self.subject_name}'")
