"""Ingest plain-text files into the store and optionally ask a question against them."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from docvault.config.settings import Settings
from docvault.models.domain import SourceText
from docvault.observability.logger import setup_logging
from docvault.pipeline.bootstrap import build_components


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("files", nargs="+", type=Path, help="Text files to ingest")
    parser.add_argument("--doc-type", default="TEXT", help="Document type label")
    parser.add_argument("--ask", default=None, help="Question to ask after ingestion")
    parser.add_argument("--hint", default="", help="Document type hint for the answer")
    parser.add_argument(
        "--no-copy",
        action="store_true",
        help="Do not keep a copy of each original under the artifact directory",
    )
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = Settings()
    setup_logging(settings.log_level, json=settings.log_json)
    components = await build_components(settings)

    failures = 0
    for path in args.files:
        data = path.read_bytes()
        origin = str(path.resolve())
        if not args.no_copy:
            saved = components.artifacts.save(path.name, data)
            origin = components.artifacts.origin_for(saved)

        source = SourceText(
            name=path.name,
            doc_type=args.doc_type,
            size_bytes=len(data),
            text=data.decode("utf-8", errors="replace"),
            origin=origin,
        )
        result = await components.orchestrator.ingest(source)
        if result.success:
            print(f"  {path.name}: {result.chunk_count} chunks ({result.doc_id})")
        else:
            failures += 1
            print(f"  {path.name}: FAILED ({result.reason})")

    print(
        f"\nStore: {await components.store.count_documents()} documents, "
        f"{await components.store.count_chunks()} chunks"
    )

    if args.ask:
        result = await components.orchestrator.ask(
            args.ask, components.generator, document_type_hint=args.hint
        )
        decision = result.decision
        print(f"\n[{decision.response_type.value} @ {decision.confidence}]")
        print(decision.text)
        if decision.artifact is not None:
            print(f"\nArtifact: {decision.artifact.path}")

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
