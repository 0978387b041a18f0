"""Directed activation links between chunks of a session."""

from typing import TYPE_CHECKING, List, Optional, Tuple, Union
from loguru import logger

from chunkloom.models.chunk_link import ChunkLink, LinkMode

if TYPE_CHECKING:
    from chunkloom.store import ChunkStore


class LinkGraph:
    """Directed graph over chunk hashes, stored in each source chunk's ``chunk_links``.

    The graph only records links and their mode; what soft and force mean at
    retrieval time is up to the consumer of the vectorized chunks.
    """

    def __init__(self, store: "ChunkStore"):
        self.store = store

    def set_link(self, source_hash, target_hash, mode: Union[LinkMode, str] = LinkMode.SOFT) -> bool:
        """
        Insert the edge source -> target, or change its mode if it already exists.

        Self links, unknown chunks and unknown modes are refused without raising.

        Returns:
            True if the graph now holds the edge with ``mode``.
        """
        if source_hash == target_hash:
            logger.debug(f"set_link: refusing self link on chunk {source_hash}")
            return False
        try:
            mode = LinkMode(mode)
        except ValueError:
            logger.debug(f"set_link: unknown link mode {mode!r}")
            return False
        source = self.store.get(source_hash)
        if source is None or target_hash not in self.store:
            logger.debug(f"set_link: {source_hash} -> {target_hash} references a missing chunk")
            return False

        for link in source.chunk_links:
            if link.target_hash == target_hash:
                link.mode = mode
                return True
        source.chunk_links.append(ChunkLink(target_hash=target_hash, mode=mode))
        return True

    def remove_link(self, source_hash, target_hash) -> bool:
        source = self.store.get(source_hash)
        if source is None:
            return False
        remaining = [link for link in source.chunk_links if link.target_hash != target_hash]
        removed = len(remaining) != len(source.chunk_links)
        source.chunk_links = remaining
        return removed

    def link_mode(self, source_hash, target_hash) -> Optional[LinkMode]:
        source = self.store.get(source_hash)
        if source is None:
            return None
        for link in source.chunk_links:
            if link.target_hash == target_hash:
                return link.mode
        return None

    def outgoing(self, source_hash) -> List[ChunkLink]:
        """The source chunk's links in insertion order; empty for unknown chunks."""
        source = self.store.get(source_hash)
        if source is None:
            return []
        return list(source.chunk_links)

    def incoming(self, target_hash) -> List[Tuple[int, LinkMode]]:
        """(source_hash, mode) for every chunk linking to ``target_hash``, in chunk order."""
        return [
            (chunk.hash, link.mode)
            for chunk in self.store
            if chunk.hash != target_hash
            for link in chunk.chunk_links
            if link.target_hash == target_hash
        ]

    def prune_references_to(self, target_hash) -> int:
        """Remove every edge pointing at ``target_hash``. Returns how many were removed."""
        pruned = 0
        for chunk in self.store:
            before = len(chunk.chunk_links)
            chunk.chunk_links = [link for link in chunk.chunk_links if link.target_hash != target_hash]
            pruned += before - len(chunk.chunk_links)
        if pruned:
            logger.debug(f"Pruned {pruned} link(s) to removed chunk {target_hash}")
        return pruned

    def edges(self) -> List[Tuple[int, int, LinkMode]]:
        """All edges as (source_hash, target_hash, mode), in chunk then insertion order."""
        return [
            (chunk.hash, link.target_hash, link.mode)
            for chunk in self.store
            for link in chunk.chunk_links
        ]
