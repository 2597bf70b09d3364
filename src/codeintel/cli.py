"""
Command line interface for the semantic chunking engine.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from .analysis import available_languages, get_analyzer
from .chunking import Chunk, SemanticChunker
from .logger import configure_logging, get_logger
from .settings import settings
from .version import get_version

app = typer.Typer(name="codeintel", help="Semantic chunking of codebases for LLM ingestion.")
log = get_logger(__name__)
console = Console()


def _write_chunks(chunks: List[Chunk], output_dir: Path) -> List[Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    manifest = []
    for position, chunk in enumerate(chunks):
        chunk_file = output_dir / f"chunk_{position:03d}.md"
        chunk_file.write_text(chunk.content, encoding="utf-8")
        written.append(chunk_file)
        entry = chunk.to_dict()
        entry.pop("content")
        entry["path"] = chunk_file.name
        manifest.append(entry)
    (output_dir / "manifest.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    log.info("chunks_written", directory=str(output_dir), chunks=len(written))
    return written


def _render_table(chunks: List[Chunk]) -> Table:
    table = Table(title="Semantic chunks")
    table.add_column("#", justify="right")
    table.add_column("Tokens", justify="right")
    table.add_column("Units", justify="right")
    table.add_column("Files")
    table.add_column("Checksum")
    for chunk in chunks:
        files = ", ".join(chunk.files[:3]) + ("..." if len(chunk.files) > 3 else "")
        table.add_row(
            str(chunk.index),
            str(chunk.token_estimate),
            str(chunk.unit_count),
            files,
            chunk.checksum[:12],
        )
    return table


@app.command()
def chunk(
    path: Path = typer.Argument(..., help="Root directory of the codebase."),
    chunk_size: int = typer.Option(
        settings.chunk_size,
        "--chunk-size",
        "-s",
        min=1,
        help="Target size of each chunk in tokens (approximate).",
    ),
    max_chunks: int = typer.Option(
        0,
        "--max-chunks",
        min=0,
        help="Maximum number of chunks to keep (0 keeps all).",
    ),
    language: Optional[str] = typer.Option(
        None, "--language", "-l", help="Codebase language (php, python, golang)."
    ),
    include: Optional[str] = typer.Option(
        None, "--include", "-I", help="File patterns to include (comma-separated)."
    ),
    exclude: Optional[str] = typer.Option(
        None, "--exclude", "-x", help="File patterns to exclude (comma-separated)."
    ),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", min=0, help="Maximum dependency traversal depth."
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write chunk_NNN.md files and manifest.json here."
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log", help="Redirect detailed logs to this file."
    ),
) -> None:
    """Split a codebase into semantic chunks."""
    if log_file:
        configure_logging(level=settings.log_level, enable_console=False, log_file=log_file)
    else:
        configure_logging(level=settings.log_level, console_level="WARNING")

    if not path.is_dir():
        typer.echo(f"[ERROR] Codebase path is not a directory: {path}")
        raise typer.Exit(code=2)

    overrides = {}
    if language:
        overrides["codebase_language"] = language
    if include is not None:
        overrides["codebase_include_patterns"] = include
    if exclude is not None:
        overrides["codebase_exclude_patterns"] = exclude
    if max_depth is not None:
        overrides["max_recursion_depth"] = max_depth
    run_settings = settings.model_copy(update=overrides)

    chunker = SemanticChunker(settings=run_settings)
    chunks = chunker.create_semantic_chunks(path, chunk_size)
    report = chunker.last_report

    if not chunks:
        typer.echo("No chunks created: no matching source files or units were found.")
        raise typer.Exit()

    if max_chunks and len(chunks) > max_chunks:
        typer.echo(f"Limiting to {max_chunks} chunks out of {len(chunks)} (as requested)")
        chunks = chunks[:max_chunks]

    console.print(_render_table(chunks))
    typer.echo(
        f"Created {len(chunks)} chunks from {report.files_processed} files "
        f"({report.unit_count} units, {report.group_count} groups)"
    )
    for failed in report.failed_files:
        typer.echo(f"[WARN] Skipped unreadable file: {failed}")

    if output_dir:
        written = _write_chunks(chunks, output_dir)
        typer.echo(f"Wrote {len(written)} chunk files to {output_dir}")


@app.command()
def languages() -> None:
    """List supported codebase languages."""
    for name in available_languages():
        analyzer = get_analyzer(name)
        extensions = ", ".join(analyzer.get_file_extensions())
        typer.echo(f"- {name} ({extensions})")


@app.command()
def version() -> None:
    """Show the installed version."""
    typer.echo(get_version())


if __name__ == "__main__":  # pragma: no cover
    app()
