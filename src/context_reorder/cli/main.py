"""CLI for context-reorder: reorder / evaluate commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from context_reorder.config import ScoringWeights
from context_reorder.core.config import AppSettings
from context_reorder.evaluation import (
    key_point_precision,
    key_point_recall,
    ndcg,
    position_effectiveness,
)
from context_reorder.exceptions import ReorderError
from context_reorder.logging_config import setup_logging
from context_reorder.models import Chunk
from context_reorder.reorderer import Reorderer
from context_reorder.scorer import score_chunks
from context_reorder.serializer import deserialize_chunks, serialize_chunks

app = typer.Typer(name="context-reorder", help="Reorder retrieved chunks for LLM context windows")
console = Console(stderr=True)

log = logging.getLogger(__name__)


def _load_chunks(chunks_file: Path) -> list[Chunk]:
    """Load chunks from a JSON file, exiting on malformed input."""
    try:
        return deserialize_chunks(chunks_file.read_text(encoding="utf-8"))
    except ReorderError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e


def _preview(text: str, limit: int = 80) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


@app.command()
def reorder(
    chunks_file: Path = typer.Argument(..., exists=True, help="JSON file with an array of chunks"),
    strategy: Optional[str] = typer.Option(None, help="score_spread | preserve_order | chronological"),
    top_k: Optional[int] = typer.Option(None, "--top-k", help="Maximum number of chunks to return"),
    min_score: Optional[float] = typer.Option(None, "--min-score", help="Drop chunks scoring below this"),
    max_tokens: Optional[int] = typer.Option(None, "--max-tokens", help="Token budget for the output"),
    start_count: Optional[int] = typer.Option(None, "--start-count"),
    end_count: Optional[int] = typer.Option(None, "--end-count"),
    group_by: Optional[str] = typer.Option(None, "--group-by", help="Metadata field to group by"),
    dedupe: Optional[bool] = typer.Option(None, "--dedupe/--no-dedupe"),
    dedupe_threshold: Optional[float] = typer.Option(None, "--dedupe-threshold"),
    include_priority_score: bool = typer.Option(False, "--include-priority-score"),
    output: Optional[Path] = typer.Option(None, help="Write the reordered JSON here"),
    table: bool = typer.Option(False, "--table", help="Print a table instead of JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Reorder a chunk file and print or save the result."""
    settings = AppSettings()
    if verbose:
        settings.observability.log_level = "DEBUG"
    setup_logging(settings.observability)

    overrides: dict[str, Any] = {
        "strategy": strategy,
        "top_k": top_k,
        "min_score": min_score,
        "max_tokens": max_tokens,
        "start_count": start_count,
        "end_count": end_count,
        "group_by": group_by,
        "deduplicate": dedupe,
        "deduplicate_threshold": dedupe_threshold,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if include_priority_score:
        overrides["include_priority_score"] = True

    chunks = _load_chunks(chunks_file)
    try:
        reorderer = Reorderer.from_settings(settings, **overrides)
        result = reorderer.reorder_sync(chunks)
    except ReorderError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e

    log.info("Reordered %d chunks into %d", len(chunks), len(result))

    if table:
        t = Table(title="Reordered Chunks")
        t.add_column("#", justify="right")
        t.add_column("ID", style="cyan")
        t.add_column("Score", justify="right")
        t.add_column("Text Preview", max_width=60)
        for pos, chunk in enumerate(result, 1):
            t.add_row(str(pos), chunk.id, f"{chunk.score:.3f}", _preview(chunk.text))
        Console().print(t)
        return

    payload = serialize_chunks(result)
    if output:
        output.write_text(payload, encoding="utf-8")
        console.print(f"[green]Wrote {len(result)} chunks to {output}[/green]")
    else:
        typer.echo(payload)


@app.command()
def evaluate(
    chunks_file: Path = typer.Argument(..., exists=True, help="JSON file with an ordered array of chunks"),
    key_point: List[str] = typer.Option([], "--key-point", "-k", help="Expected key point (repeatable)"),
    case_insensitive: bool = typer.Option(False, "--case-insensitive", "-i"),
) -> None:
    """Score the ordering of a chunk file."""
    chunks = _load_chunks(chunks_file)
    texts = [c.text for c in chunks]

    t = Table(title=f"Evaluation of {chunks_file.name}")
    t.add_column("Metric", style="cyan")
    t.add_column("Value", justify="right")
    if key_point:
        recall = key_point_recall(key_point, texts, case_insensitive=case_insensitive)
        precision = key_point_precision(key_point, texts, case_insensitive=case_insensitive)
        t.add_row("Key-point recall", f"{recall:.4f}")
        t.add_row("Key-point precision", f"{precision:.4f}")
    t.add_row("nDCG", f"{ndcg([c.score for c in chunks]):.4f}")
    t.add_row(
        "Position effectiveness",
        f"{position_effectiveness(score_chunks(chunks, ScoringWeights())):.4f}",
    )
    Console().print(t)


if __name__ == "__main__":
    app()
