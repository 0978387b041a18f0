"""Command-line entry point: open a chunk session from chunker output and finalize it."""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from chunkloom.collaborators import DirectoryVectorizer
from chunkloom.config import load_config
from chunkloom.errors import ChunkLoomError
from chunkloom.finalization import FinalizationPipeline, generate_collection_id
from chunkloom.keywords import keyword_preview
from chunkloom.logging_setup import setup_logger
from chunkloom.models.chunk import ContextLevel
from chunkloom.session import ChunkSession

# Add scripts to path for graph_visualizer
sys.path.insert(0, str(Path(__file__).parent / "scripts"))
from graph_visualizer import SessionGraphVisualizer


class JsonFileChunker:
    """Chunker that replays chunker output saved as JSON (a list, or {"chunks": [...]})."""

    def __init__(self, path: str):
        self.path = Path(path)

    def chunk(self, document: str, subject_name: str):
        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("chunks", [])
        return data


def main():
    """Main function to run the chunk session CLI."""
    config = load_config()
    setup_logger(config.log_level)

    parser = argparse.ArgumentParser(
        description="Review chunker output and finalize it into one document for vectorization"
    )
    parser.add_argument("chunks_path", help="JSON file with the chunker output")
    parser.add_argument("subject_name", help="Name the document is vectorized under")
    parser.add_argument(
        "--context-level",
        choices=[level.value for level in ContextLevel],
        default=ContextLevel.CHARACTER.value,
        help="Scope the vectorized chunks apply at (default: character)"
    )
    parser.add_argument(
        "--disable",
        type=int,
        nargs="*",
        default=[],
        help="Indexes of chunks to leave out of the finalized document"
    )
    parser.add_argument(
        "--export-graph",
        action="store_true",
        help="Write the chunk link graph as JSON and GraphML into the output directory"
    )
    parser.add_argument(
        "--finalize",
        action="store_true",
        help="Reconstruct the document and write it through the directory vectorizer"
    )

    args = parser.parse_args()

    if not Path(args.chunks_path).exists():
        print(f"Error: Chunk file not found at {args.chunks_path}")
        sys.exit(1)

    session = ChunkSession.open(
        document="",
        subject_name=args.subject_name,
        chunker=JsonFileChunker(args.chunks_path),
        context_level=ContextLevel(args.context_level),
        weights=config.weights,
    )
    for index in args.disable:
        if 0 <= index < len(session.store):
            session.store.update(session.chunks[index].hash, "disabled", True)

    stats = session.store.statistics()
    print(f"Session: {session.subject_name} ({session.context_level.value})")
    print("-" * 50)
    print(f"  - Chunks enabled: {stats.enabled_chunks}/{stats.total_chunks}")
    print(f"  - Total size: {stats.total_chars:,} chars (avg {stats.average_chars})")

    print("\nChunks:")
    for chunk in session.store:
        top, remaining = keyword_preview(chunk, config.keyword_preview_limit, session.weights)
        marker = " " if not chunk.disabled else "x"
        keywords = ", ".join(f"{k}^{w}" for k, w in top) or "No keywords"
        more = f" +{remaining}" if remaining else ""
        print(f"  [{marker}] #{chunk.index} {chunk.section} ({chunk.char_count} chars): {keywords}{more}")

    output_dir = Path(config.output_dir)
    if args.export_graph:
        output_dir.mkdir(parents=True, exist_ok=True)
        visualizer = SessionGraphVisualizer()
        stem = Path(args.chunks_path).stem
        json_path = output_dir / f"{stem}_session.json"
        graphml_path = output_dir / f"{stem}_links.graphml"
        visualizer.export_to_json(session, str(json_path))
        visualizer.export_to_graphml(session, str(graphml_path))
        print(f"\n✓ Graph exported:")
        print(f"  - JSON: {json_path}")
        print(f"  - GraphML: {graphml_path}")

    if args.finalize:
        pipeline = FinalizationPipeline(
            DirectoryVectorizer(
                str(output_dir),
                lambda name: generate_collection_id(name, config.collection_prefix),
            ),
            collection_prefix=config.collection_prefix,
        )
        try:
            result = asyncio.run(pipeline.finalize(session))
        except ChunkLoomError as e:
            print(f"\n✗ {e}")
            sys.exit(1)

        if result.succeeded:
            print(f"\n✓ {result.document.chunk_count} chunks finalized as {result.document.collection_id}")
        elif result.skipped:
            print(f"\n⚠ Vectorization skipped: {result.outcome.reason}")
        else:
            print(f"\n✗ Vectorization failed: {result.outcome.reason}")
            sys.exit(1)

    session.close()


if __name__ == "__main__":
    main()
