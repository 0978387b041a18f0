"""Tests for the session link graph export."""

import json
import sys
from pathlib import Path

# Add scripts to path for graph_visualizer
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))
from graph_visualizer import SessionGraphVisualizer


class TestSessionGraphVisualizer:
    """NetworkX conversion, statistics and exports."""

    def test_to_networkx(self, session):
        a, b, c = session.store.hashes
        session.links.set_link(a, b, "force")
        graph = SessionGraphVisualizer().to_networkx(session)
        assert set(graph.nodes) == {a, b, c}
        assert graph.edges[a, b]["mode"] == "force"
        assert graph.nodes[a]["section"] == "Intro"

    def test_statistics(self, session):
        a, b, c = session.store.hashes
        session.links.set_link(a, b, "force")
        session.links.set_link(b, a, "soft")
        stats = SessionGraphVisualizer().get_statistics(session)
        assert stats["link_modes"] == {"soft": 1, "force": 1}
        assert stats["num_connected_components"] == 2
        assert stats["unlinked_chunks"] == [c]
        assert stats["enabled_chunks"] == 3

    def test_exports(self, session, tmp_path):
        a, b, _ = session.store.hashes
        session.links.set_link(a, b, "soft")
        visualizer = SessionGraphVisualizer()
        json_path = tmp_path / "session.json"
        graphml_path = tmp_path / "links.graphml"

        visualizer.export_to_json(session, str(json_path))
        visualizer.export_to_graphml(session, str(graphml_path))

        data = json.loads(json_path.read_text(encoding="utf-8"))
        assert data["subject_name"] == "Atsu"
        assert len(data["chunks"]) == 3
        assert data["links"] == [{"source": a, "target": b, "mode": "soft"}]
        assert graphml_path.exists()
