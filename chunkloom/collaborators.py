"""Interfaces of the services a chunk session depends on, plus a file-backed vectorizer."""

from pathlib import Path
from typing import Any, Dict, List, Protocol, Sequence, Union, runtime_checkable
from loguru import logger

from chunkloom.models.chunk import ContextLevel
from chunkloom.models.finalization import VectorizeOutcome
from chunkloom.models.raw_chunk import RawChunk


@runtime_checkable
class Chunker(Protocol):
    """Splits a source document into raw chunks. Called once per session."""

    def chunk(self, document: str, subject_name: str) -> Sequence[Union[RawChunk, Dict[str, Any]]]:
        ...


@runtime_checkable
class KeywordExtractor(Protocol):
    """Extracts keywords for a single chunk's text."""

    async def extract(self, chunk_text: str, subject_name: str) -> List[str]:
        ...


@runtime_checkable
class Vectorizer(Protocol):
    """Vectorizes a reconstructed document. Called exactly once per finalize."""

    async def vectorize(self, subject_name: str, document_text: str,
                        context_level: ContextLevel) -> VectorizeOutcome:
        ...


class DirectoryVectorizer:
    """Vectorizer stand-in that writes each document to ``<output_dir>/<collection_id>.md``.

    Reports ``skipped`` when the file already holds the same text.
    """

    def __init__(self, output_dir: str, collection_id_for=None):
        """
        Args:
            output_dir: Directory for written documents; created on first write.
            collection_id_for: Callable mapping a subject name to a file stem.
                Defaults to ``chunkloom.finalization.generate_collection_id``.
        """
        self.output_dir = Path(output_dir)
        if collection_id_for is None:
            from chunkloom.finalization import generate_collection_id
            collection_id_for = generate_collection_id
        self.collection_id_for = collection_id_for

    async def vectorize(self, subject_name: str, document_text: str,
                        context_level: ContextLevel) -> VectorizeOutcome:
        path = self.output_dir / f"{self.collection_id_for(subject_name)}.md"
        try:
            if path.exists() and path.read_text(encoding="utf-8") == document_text:
                return VectorizeOutcome.skipped(f"{path} is already up to date")
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(document_text, encoding="utf-8")
        except OSError as e:
            logger.error(f"Could not write {path}: {e}")
            return VectorizeOutcome.failure(str(e))
        logger.info(f"Wrote {len(document_text)} chars for '{subject_name}' ({context_level.value}) to {path}")
        return VectorizeOutcome.success()
