"""Tests for the invariants the Chunk model enforces on construction."""

from chunkloom.config import WeightConfig
from chunkloom.keywords import resolve_weight
from chunkloom.models.chunk import Chunk
from chunkloom.models.chunk_link import LinkMode


class TestChunkValidation:
    """Weights are normalized and clamped, links are deduplicated."""

    def test_out_of_range_weights_are_clamped(self):
        chunk = Chunk(hash=1, custom_weights={"x": 500, "y": 0})
        assert chunk.custom_weights == {"x": 200, "y": 1}
        assert resolve_weight(chunk, "x") == 200

    def test_weight_keys_are_normalized(self):
        chunk = Chunk(hash=1, custom_weights={"  Sarcastic ": 50, "": 10})
        assert chunk.custom_weights == {"sarcastic": 50}

    def test_weight_scale_from_validation_context(self):
        chunk = Chunk.model_validate(
            {"hash": 1, "custom_weights": {"x": 500}},
            context={"weights": WeightConfig(max_weight=300)},
        )
        assert chunk.custom_weights == {"x": 300}

    def test_self_and_duplicate_links_are_dropped(self):
        chunk = Chunk(
            hash=1,
            chunk_links=[
                {"target_hash": 1, "mode": "force"},
                {"target_hash": 2, "mode": "soft"},
                {"target_hash": 2, "mode": "force"},
                {"target_hash": 3, "mode": "force"},
            ],
        )
        assert [(l.target_hash, l.mode) for l in chunk.chunk_links] == [(2, LinkMode.SOFT), (3, LinkMode.FORCE)]

    def test_keyword_lists_never_hold_commas(self):
        chunk = Chunk(hash=1, system_keywords=["salt, pepper"], custom_keywords=["a,b", " "])
        assert chunk.system_keywords == ["salt", "pepper"]
        assert chunk.custom_keywords == ["a", "b"]

    def test_disabled_keywords_match_on_normalized_text(self):
        chunk = Chunk(hash=1, system_keywords=["Calm", "loud"], disabled_keywords=["  CALM\t"])
        assert chunk.active_keywords == ["loud"]
