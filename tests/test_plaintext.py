"""Tests for the plaintext keyword:weight encoding."""

from chunkloom.keywords import add_custom_keyword, disable_keyword, resolve_weight, set_weight
from chunkloom.models.chunk import Chunk
from chunkloom.plaintext import apply_plaintext, format_keywords, parse_entry, parse_keywords


def make_chunk(**kwargs) -> Chunk:
    return Chunk(hash=1, text="body", section="Intro", title="Intro", **kwargs)


def effective_pairs(chunk: Chunk):
    return {(k.lower(), resolve_weight(chunk, k)) for k in chunk.all_keywords}


class TestParse:
    """Parsing splits at the last colon and validates the integer suffix."""

    def test_mixed_entries(self):
        parsed = parse_keywords("calm:50, loud, brave:999")
        assert [p.keyword for p in parsed] == ["calm", "loud", "brave"]
        assert [p.weight for p in parsed] == [50, None, 200]

    def test_last_colon_split(self):
        entry = parse_entry("time: 10:30")
        assert entry.keyword == "time: 10"
        assert entry.weight == 30

    def test_non_integer_suffix_keeps_whole_entry(self):
        entry = parse_entry(" ratio:high ")
        assert entry.keyword == "ratio:high"
        assert entry.weight is None

    def test_empty_prefix_keeps_whole_entry(self):
        entry = parse_entry(":50")
        assert entry.keyword == ":50"
        assert entry.weight is None

    def test_low_weight_clamps_to_minimum(self):
        assert parse_entry("quiet:0").weight == 1
        assert parse_entry("quiet:-4").weight == 1

    def test_blank_entries_skipped(self):
        assert [p.keyword for p in parse_keywords(" , a,, b ,")] == ["a", "b"]
        assert parse_keywords("") == []


class TestFormat:
    """Formatting writes every keyword with its effective weight."""

    def test_format_uses_resolved_weights(self):
        chunk = make_chunk(system_keywords=["tall", "calm"], custom_keywords=["sarcastic"])
        set_weight(chunk, "calm", 60)
        assert format_keywords(chunk) == "tall:20, calm:60, sarcastic:100"

    def test_round_trip_preserves_effective_weights(self):
        chunk = make_chunk(system_keywords=["Tall", "calm", "time:late"], custom_keywords=["sarcastic"])
        set_weight(chunk, "calm", 60)
        add_custom_keyword(chunk, "Loud", weight=180)
        disable_keyword(chunk, "tall")
        before = effective_pairs(chunk)

        reparsed = make_chunk(system_keywords=list(chunk.system_keywords))
        apply_plaintext(reparsed, format_keywords(chunk))

        assert effective_pairs(reparsed) == before
        assert {(p.keyword.lower(), p.weight) for p in parse_keywords(format_keywords(chunk))} == before


class TestApply:
    """apply_plaintext rewrites the vocabulary."""

    def test_scenario_calm_loud_brave(self):
        chunk = make_chunk()
        apply_plaintext(chunk, "calm:50, loud, brave:999")
        assert chunk.custom_keywords == ["calm", "loud", "brave"]
        assert resolve_weight(chunk, "calm") == 50
        assert resolve_weight(chunk, "brave") == 200
        assert resolve_weight(chunk, "loud") == 100

    def test_unlisted_system_keywords_are_dropped(self):
        chunk = make_chunk(system_keywords=["tall", "calm"])
        disable_keyword(chunk, "tall")
        apply_plaintext(chunk, "calm, new")
        assert chunk.system_keywords == ["calm"]
        assert chunk.custom_keywords == ["new"]
        assert chunk.disabled_keywords == []
        assert resolve_weight(chunk, "calm") == 20

    def test_duplicates_collapse_to_first_spelling(self):
        chunk = make_chunk()
        apply_plaintext(chunk, "Calm:10, calm:70")
        assert chunk.custom_keywords == ["Calm"]
        assert resolve_weight(chunk, "calm") == 70


class TestCommas:
    """Keywords never contain commas, so the encoding always round-trips."""

    def test_comma_keyword_refused_by_add(self):
        chunk = make_chunk()
        assert add_custom_keyword(chunk, "salt, pepper") is False
        assert chunk.custom_keywords == []

    def test_extracted_comma_entry_round_trips_as_separate_keywords(self):
        chunk = make_chunk(system_keywords=["salt, pepper"])
        before = effective_pairs(chunk)
        assert before == {("salt", 20), ("pepper", 20)}

        reparsed = make_chunk(system_keywords=list(chunk.system_keywords))
        apply_plaintext(reparsed, format_keywords(chunk))
        assert effective_pairs(reparsed) == before
