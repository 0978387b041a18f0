"""Pytest configuration and fixtures."""

import itertools
import pytest

from chunkloom.session import ChunkSession
from chunkloom.store import ChunkStore
from tests.helpers import RecordingVectorizer, StaticChunker, raw_chunks


@pytest.fixture
def sections():
    return ["Intro", "Personality", "Appearance"]


@pytest.fixture
def chunker(sections):
    return StaticChunker(raw_chunks(*sections))


@pytest.fixture
def session(chunker):
    """Session over three ingested chunks: Intro, Personality, Appearance."""
    return ChunkSession.open("full sheet", "Atsu", chunker)


@pytest.fixture
def store():
    """Empty store with a deterministic clock that never advances."""
    return ChunkStore(clock=itertools.repeat(1_000).__next__)


@pytest.fixture
def vectorizer():
    return RecordingVectorizer()
