"""Link graph export and statistics for chunk sessions."""

import json
import sys
from pathlib import Path
from typing import Any

# Add parent directory to path to import chunkloom when run from scripts/
sys.path.insert(0, str(Path(__file__).parent.parent))

import networkx as nx
from chunkloom.models.chunk_link import LinkMode
from chunkloom.session import ChunkSession


def _graphml_safe_value(value: Any) -> Any:
    """Convert a value to a type supported by GraphML (string, int, float, bool)."""
    if value is None:
        return None
    if isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


class SessionGraphVisualizer:
    """Builds NetworkX views of a session's activation links."""

    def to_networkx(self, session: ChunkSession) -> nx.DiGraph:
        """
        Convert a session to a NetworkX directed graph.

        Args:
            session: The chunk session to convert

        Returns:
            DiGraph with one node per chunk (keyed by hash) and one edge per link
        """
        G = nx.DiGraph()

        for chunk in session.store:
            G.add_node(
                chunk.hash,
                section=_graphml_safe_value(chunk.section),
                index=chunk.index,
                disabled=chunk.disabled,
                context_level=chunk.context_level.value,
                chars=chunk.char_count,
                keywords=_graphml_safe_value(chunk.active_keywords),
            )

        for source, target, mode in session.links.edges():
            G.add_edge(source, target, mode=mode.value)

        return G

    def get_statistics(self, session: ChunkSession) -> dict:
        """
        Get statistics about the session's chunks and links.

        Args:
            session: The chunk session to analyze

        Returns:
            Dictionary with chunk counts and graph statistics
        """
        G = self.to_networkx(session)
        stats = session.store.statistics()

        mode_counts = {mode.value: 0 for mode in LinkMode}
        for _, _, mode in session.links.edges():
            mode_counts[mode.value] += 1

        return {
            "total_chunks": stats.total_chunks,
            "enabled_chunks": stats.enabled_chunks,
            "total_chars": stats.total_chars,
            "average_chars": stats.average_chars,
            "link_modes": mode_counts,
            "graph_density": nx.density(G) if len(G.nodes) > 1 else 0.0,
            "num_connected_components": nx.number_weakly_connected_components(G) if len(G.nodes) > 0 else 0,
            "unlinked_chunks": sorted(n for n in G.nodes if G.degree(n) == 0),
        }

    def export_to_json(self, session: ChunkSession, file_path: str):
        """
        Export the session's chunks and links to a JSON file.

        Args:
            session: The chunk session to export
            file_path: Path to save the JSON file
        """
        data = {
            "subject_name": session.subject_name,
            "context_level": session.context_level.value,
            "chunks": [chunk.model_dump(mode="json") for chunk in session.store],
            "links": [
                {"source": source, "target": target, "mode": mode.value}
                for source, target, mode in session.links.edges()
            ],
            "statistics": session.store.statistics().model_dump(),
        }

        with open(file_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def export_to_graphml(self, session: ChunkSession, file_path: str):
        """
        Export the link graph to GraphML format.

        Args:
            session: The chunk session to export
            file_path: Path to save the GraphML file
        """
        nx.write_graphml(self.to_networkx(session), file_path)
