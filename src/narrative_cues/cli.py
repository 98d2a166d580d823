"""Command-line interface for Narrative Cues."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from narrative_cues import __version__

console = Console()

EXIT_LOAD_FAILURE = 2
EXIT_ANALYSIS_FAILURE = 3


def configure_logging(level: str) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def load_state(path: str | None):
    """Parse a corpus file, exiting with a message if it cannot be loaded."""
    from narrative_cues.corpus import CorpusParser
    from narrative_cues.ingest import CorpusLoadError

    parser = CorpusParser()
    try:
        with console.status("Parsing corpus..."):
            return parser.load(Path(path) if path else None)
    except CorpusLoadError as e:
        console.print(f"[red]Could not load corpus:[/red] {escape(str(e))}")
        sys.exit(EXIT_LOAD_FAILURE)


corpus_argument = click.argument(
    "path", required=False, type=click.Path(dir_okay=False)
)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool) -> None:
    """Narrative Cues - characters, attentional cues and intensity in annotated Mark."""
    from narrative_cues.config import get_settings

    configure_logging("DEBUG" if verbose else get_settings().log_level)


@main.command()
def status() -> None:
    """Show configuration and analysis service status."""
    from narrative_cues.config import get_settings
    from narrative_cues.llm import AnalysisClient

    settings = get_settings()
    console.print("[bold]Narrative Cues Status[/bold]\n")
    console.print(f"Book: {settings.book_name} (Ref code {settings.book_code})")
    console.print(f"Corpus: {settings.corpus_path}")
    console.print(f"Match strategy: {settings.match_strategy}")

    if settings.corpus_path.exists():
        console.print("[green]OK[/green] Corpus file present")
    else:
        console.print("[red]X[/red] Corpus file not found")

    console.print(f"\nAnalysis endpoint: {settings.analysis_endpoint}")
    if AnalysisClient(settings).is_configured:
        console.print("[green]OK[/green] API key configured")
    else:
        console.print("[yellow]![/yellow] API key not set (NC_ANALYSIS_API_KEY)")


@main.command()
@corpus_argument
def parse(path: str | None) -> None:
    """Parse a corpus and show what was found."""
    state = load_state(path)

    table = Table(title=f"{state.book} Corpus")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    for metric, value in state.stats.items():
        table.add_row(metric.replace("_", " ").capitalize(), f"{value:,}")
    console.print(table)


@main.command()
@corpus_argument
@click.option("--chapter", "-c", type=int, default=1, show_default=True)
def summary(path: str | None, chapter: int) -> None:
    """Summarize one chapter."""
    state = load_state(path)
    chapter_summary = state.get_chapter_summary(chapter)
    if chapter_summary is None:
        console.print(f"[yellow]Chapter {chapter} not in corpus[/yellow]")
        return

    console.print(f"[bold]{state.book} {chapter}[/bold]")
    console.print(f"  Verses: {chapter_summary.verse_count}")
    console.print(f"  Sentences: {chapter_summary.sentence_count}")
    console.print(f"  Characters: {', '.join(chapter_summary.character_names) or '-'}")
    console.print(f"  Cues: {len(chapter_summary.cues)}")


@main.command()
@corpus_argument
@click.option("--limit", "-n", type=int, default=20, show_default=True)
def characters(path: str | None, limit: int) -> None:
    """List characters by number of mentions."""
    state = load_state(path)

    table = Table(title="Characters")
    table.add_column("Character", style="cyan")
    table.add_column("Mentions", style="green", justify="right")
    table.add_column("Variants", style="dim")
    ranked = sorted(state.characters, key=lambda c: -c.total_mentions)
    for character in ranked[:limit]:
        table.add_row(character.name, f"{character.total_mentions:,}", ", ".join(character.variants))
    console.print(table)


@main.command()
@corpus_argument
@click.option("--chapter", "-c", type=int, default=1, show_default=True)
@click.option(
    "--type",
    "cue_type",
    type=click.Choice(["primacy", "causal", "focalization", "absence", "prolepsis"]),
    help="Only show one category",
)
@click.option("--limit", "-n", type=int, default=30, show_default=True)
def cues(path: str | None, chapter: int, cue_type: str | None, limit: int) -> None:
    """List attentional cues in a chapter."""
    state = load_state(path)
    found = state.get_cues_in_chapter(chapter)
    if cue_type:
        found = [cue for cue in found if cue.type.value == cue_type]

    console.print(f"[bold]{len(found)} cues in {state.book} {chapter}[/bold]\n")
    for cue in found[:limit]:
        location = state.index.location(cue.sentence_id)
        verse = location[1] if location else "?"
        console.print(
            f"  [cyan]{cue.type.value}[/cyan] [dim]v{verse}[/dim] "
            f"'{escape(cue.keyword)}': {escape(cue.text[:80])}"
        )


@main.command()
@corpus_argument
@click.option("--chapter", "-c", type=int, default=1, show_default=True)
def network(path: str | None, chapter: int) -> None:
    """Show the character network of a chapter."""
    from narrative_cues.analysis import RelationshipBuilder

    state = load_state(path)
    chapter_network = RelationshipBuilder(state).build_network(chapter)

    table = Table(title=f"Characters in {state.book} {chapter}")
    table.add_column("Character", style="cyan")
    table.add_column("Mentions", justify="right")
    table.add_column("Importance", justify="right")
    for node in sorted(chapter_network.nodes, key=lambda n: -n.importance):
        name = f"{node.name} [dim](background)[/dim]" if node.is_background else node.name
        table.add_row(name, str(node.mentions), f"{node.importance:.2f}")
    console.print(table)

    console.print("\n[bold]Edges:[/bold]")
    if not chapter_network.edges:
        console.print("  [dim]No relationships in this chapter[/dim]")
    for edge in sorted(chapter_network.edges, key=lambda e: -e.strength):
        console.print(f"  {escape(edge.to_triple())}")


@main.command()
@corpus_argument
@click.option("--chapter", "-c", type=int, default=1, show_default=True)
def intensity(path: str | None, chapter: int) -> None:
    """Show narrative intensity per verse (a display heuristic)."""
    from narrative_cues.analysis import IntensityScorer

    state = load_state(path)
    scores = IntensityScorer(state).score_chapter(chapter)

    table = Table(title=f"Narrative intensity, {state.book} {chapter}")
    table.add_column("Verse", justify="right")
    table.add_column("Intensity", justify="right", style="green")
    table.add_column("Characters")
    table.add_column("Cues", justify="right")
    for verse in scores:
        bar = "#" * round(verse.intensity * 20)
        table.add_row(
            str(verse.verse),
            f"{verse.intensity:.2f} {bar}",
            ", ".join(verse.characters),
            str(len(verse.cues)),
        )
    console.print(table)


@main.command()
@click.argument("reference")
@corpus_argument
def text(reference: str, path: str | None) -> None:
    """Print the text of a reference such as 'Mark 1:1-8'."""
    from narrative_cues.ingest import format_reference, parse_reference

    verse_range = parse_reference(reference)
    if verse_range is None:
        console.print(f"[red]Not a reference:[/red] {escape(reference)} (expected e.g. 'Mark 1:1-8')")
        return

    state = load_state(path)
    passage = state.get_text_range(verse_range.chapter, verse_range.start_verse, verse_range.end_verse)
    console.print(f"[bold]{format_reference(verse_range)}[/bold]")
    console.print(escape(passage) if passage else "[dim]No text for this range[/dim]")


@main.command()
@click.argument("query")
@corpus_argument
@click.option("--limit", "-n", type=int, default=25, show_default=True)
def search(query: str, path: str | None, limit: int) -> None:
    """Search tokens. Supports wildcards, "exact", ~fuzzy and latin:translit."""
    from narrative_cues.corpus import TokenSearch

    state = load_state(path)
    hits = TokenSearch(state).search(query)

    console.print(f"[bold]{len(hits)} matches for[/bold] {escape(query)}\n")
    for hit in hits[:limit]:
        score = f" [dim]({hit.score:.2f})[/dim]" if hit.score < 1 else ""
        console.print(
            f"  {state.book} {hit.chapter}:{hit.verse}  {escape(hit.form)} "
            f"[dim]({escape(hit.lemma)}, {hit.transliteration}, {hit.upos})[/dim]{score}"
        )


@main.command()
@corpus_argument
@click.option("--chapter", "-c", type=int, default=1, show_default=True)
@click.option("--output", "-o", type=click.Path(), help="Output JSON file")
@click.option("--cues-csv", type=click.Path(), help="Also write the chapter's cues as CSV")
def export(path: str | None, chapter: int, output: str | None, cues_csv: str | None) -> None:
    """Export a chapter analysis as JSON."""
    from narrative_cues.analysis import build_export, write_cues_csv, write_json
    from narrative_cues.config import get_settings

    state = load_state(path)
    output_path = (
        Path(output)
        if output
        else get_settings().exports_dir / f"{state.book.lower()}-chapter-{chapter}-analysis.json"
    )

    write_json(build_export(state, chapter), output_path)
    console.print(f"[green]OK[/green] Analysis saved to {output_path}")

    if cues_csv:
        rows = write_cues_csv(state.get_cues_in_chapter(chapter), Path(cues_csv))
        console.print(f"[green]OK[/green] {rows} cues saved to {cues_csv}")


@main.command()
@corpus_argument
@click.option("--chapter", "-c", type=int, default=1, show_default=True)
@click.option("--timeout", type=float, help="Request timeout in seconds")
def analyze(path: str | None, chapter: int, timeout: float | None) -> None:
    """Send a chapter to the external analysis service for cue detection."""
    from narrative_cues.ingest import CorpusLoadError
    from narrative_cues.llm import AnalysisClient, AnalysisServiceError, assemble_analysis_text

    state = load_state(path)
    try:
        passage = assemble_analysis_text(state, chapter)
    except CorpusLoadError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(EXIT_LOAD_FAILURE)

    client = AnalysisClient(timeout=timeout)
    try:
        with console.status("Running narratological analysis..."):
            proposed = client.detect_cues(passage)
    except AnalysisServiceError as e:
        console.print(f"[red]Analysis failed:[/red] {escape(str(e))}")
        sys.exit(EXIT_ANALYSIS_FAILURE)

    if not proposed:
        console.print("[yellow]The service proposed no cues[/yellow]")
        return

    table = Table(title=f"Proposed cues, {state.book} {chapter}")
    table.add_column("Type", style="cyan")
    table.add_column("Location")
    table.add_column("Confidence", justify="right")
    table.add_column("Explanation", style="dim")
    for cue in proposed:
        confidence = f"{cue.confidence:.2f}" if cue.confidence is not None else "-"
        table.add_row(escape(cue.type), escape(cue.location), confidence, escape(cue.explanation))
    console.print(table)


if __name__ == "__main__":
    main()
