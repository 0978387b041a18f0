"""Rebuild a document from the enabled chunks and hand it to the vectorizer."""

import re
from typing import List
from loguru import logger

from chunkloom.collaborators import Vectorizer
from chunkloom.config import DEFAULT_COLLECTION_PREFIX
from chunkloom.errors import FinalizationInProgressError, NoEnabledChunksError, VectorizationError
from chunkloom.models.chunk import Chunk
from chunkloom.models.finalization import FinalizationResult, ReconstructedDocument, VectorizeStatus

UNTITLED_SECTION = "Untitled"
FRAGMENT_SEPARATOR = "\n\n"


def generate_collection_id(subject_name: str, prefix: str = DEFAULT_COLLECTION_PREFIX) -> str:
    """Collection id for a subject: non-word characters become underscores, runs collapse, lower case."""
    sanitized = re.sub(r"[^a-zA-Z0-9_]", "_", subject_name)
    sanitized = re.sub(r"_+", "_", sanitized).lower()
    return f"{prefix}{sanitized}"


def render_fragment(chunk: Chunk) -> str:
    section = chunk.section.strip() or UNTITLED_SECTION
    return f"## {section}\n\n{chunk.text}"


def reconstruct(chunks: List[Chunk]) -> str:
    """Join the fragments of ``chunks`` in index order, separated by a blank line."""
    ordered = sorted(chunks, key=lambda c: c.index)
    return FRAGMENT_SEPARATOR.join(render_fragment(chunk) for chunk in ordered)


class FinalizationPipeline:
    """Turns a session's enabled chunks into one document and submits it.

    The pipeline only reads the session's chunks. The in-flight flag lives on
    the session, so a second finalize of the same session is rejected rather
    than queued, whichever pipeline it comes through.
    """

    def __init__(self, vectorizer: Vectorizer, collection_prefix: str = DEFAULT_COLLECTION_PREFIX):
        """
        Args:
            vectorizer: Collaborator receiving the reconstructed document.
            collection_prefix: Prefix for the collection id reported with the document.
        """
        self.vectorizer = vectorizer
        self.collection_prefix = collection_prefix

    def build_document(self, session) -> ReconstructedDocument:
        """
        Reconstruct the document for ``session`` without calling the vectorizer.

        Raises:
            NoEnabledChunksError: If the session has no enabled chunks.
        """
        enabled = session.store.enabled_chunks()
        if not enabled:
            raise NoEnabledChunksError()
        return ReconstructedDocument(
            subject_name=session.subject_name,
            collection_id=generate_collection_id(session.subject_name, self.collection_prefix),
            context_level=session.context_level,
            text=reconstruct(enabled),
            chunk_count=len(enabled),
            chunk_hashes=[chunk.hash for chunk in enabled],
        )

    async def finalize(self, session) -> FinalizationResult:
        """
        Reconstruct the session's document and submit it to the vectorizer once.

        Args:
            session: ChunkSession to read from; only its in-flight flag is touched.

        Returns:
            FinalizationResult carrying the document and the vectorizer's outcome.

        Raises:
            FinalizationInProgressError: If another finalize of this session has not finished.
            NoEnabledChunksError: If every chunk is disabled; the vectorizer is not called.
            VectorizationError: If the vectorizer raised.
        """
        if session.finalizing:
            raise FinalizationInProgressError()
        document = self.build_document(session)

        session.finalizing = True
        try:
            logger.info(
                f"Finalizing {document.chunk_count} chunk(s) for '{document.subject_name}' "
                f"({len(document.text)} chars)"
            )
            try:
                outcome = await self.vectorizer.vectorize(
                    document.subject_name, document.text, document.context_level
                )
            except Exception as e:
                logger.error(f"Vectorization failed for '{document.subject_name}': {e}")
                raise VectorizationError(f"Failed to finalize chunks: {e}") from e
        finally:
            session.finalizing = False

        if outcome.status == VectorizeStatus.SUCCESS:
            logger.info(f"{document.chunk_count} chunks finalized and vectorized")
        elif outcome.status == VectorizeStatus.SKIPPED:
            logger.warning(f"Vectorization skipped for '{document.subject_name}': {outcome.reason}")
        else:
            logger.warning(f"Vectorization failed for '{document.subject_name}': {outcome.reason}")
        return FinalizationResult(document=document, outcome=outcome)
