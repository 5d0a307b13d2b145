#!/usr/bin/env python3
"""SOWSmith CLI - generate, review and export SOW/Proposal drafts.

Usage:
    # Pre-fill discovery from a call transcript
    python main.py extract ./call.txt -o discovery.json

    # Generate both drafts from a discovery file (template generator only)
    python main.py generate --discovery discovery.json --no-llm

    # Generate from a built-in sample and export the proposal as HTML
    python main.py generate --sample A
    python main.py export --doc proposal --format html
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from config import settings
from contracts import DocumentStatus
from errors import DiscoveryValidationError, StatusTransitionError
from export import EXPORTERS, export_document, export_filename
from generator import headline_total
from intake import SAMPLES, parse_transcript
from orchestrator import DraftManager
from providers import list_providers as get_available_providers
from workspace import JsonFileStorage, WorkspaceStore


console = Console()
logger = logging.getLogger("sowsmith")


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def open_store(workspace_dir: Optional[str]) -> WorkspaceStore:
    storage = JsonFileStorage(workspace_dir or settings.get_workspace_path())
    logger.debug("Workspace file: %s", storage.path)
    store = WorkspaceStore(storage)
    store.load()
    return store


def print_validation_error(error: DiscoveryValidationError) -> None:
    console.print(f"[red]Error:[/red] {error}")
    for field_error in error.field_errors:
        console.print(f"  [yellow]{field_error['field']}[/yellow]: {field_error['message']}")


def read_discovery_file(path: str) -> dict:
    return json.loads(Path(path).read_text(encoding="utf-8"))


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def cli(verbose: bool):
    """SOWSmith: Statement of Work and Proposal generator.

    Turns structured discovery inputs into a fully populated SOW and its
    companion Proposal, with or without an LLM.
    """
    configure_logging(verbose)


@cli.command()
@click.argument("transcript", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", "output_file", default=None, help="Write the extracted discovery as JSON")
def extract(transcript: str, output_file: Optional[str]):
    """Pre-fill discovery fields from a call transcript."""
    text = Path(transcript).read_text(encoding="utf-8", errors="replace")
    partial = parse_transcript(text)

    table = Table(title="Extracted discovery")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    if partial.client:
        table.add_row("Client", f"{partial.client.name} ({partial.client.industry})")
    if partial.project:
        table.add_row("Project", partial.project.title)
        table.add_row("Objectives", str(len(partial.project.objectives)))
    if partial.scope:
        table.add_row("Modules", ", ".join(partial.scope.modules))
    if partial.constraints:
        table.add_row("Timeline", f"{partial.constraints.timeline_weeks} weeks")
        table.add_row("Budget", partial.constraints.budget_range or "TBD")
    if partial.pricing_preference:
        table.add_row("Pricing", partial.pricing_preference.value)
    console.print(table)

    if output_file:
        Path(output_file).write_text(json.dumps(partial.to_json_dict(), indent=2), encoding="utf-8")
        console.print(f"[green]Saved:[/green] {output_file}")


@cli.command()
@click.option("--discovery", "discovery_file", type=click.Path(exists=True, dir_okay=False),
              help="Discovery JSON file (camelCase or snake_case)")
@click.option("--sample", type=click.Choice(sorted(SAMPLES)), help="Use a built-in sample discovery")
@click.option("--transcript", type=click.Path(exists=True, dir_okay=False),
              help="Extract discovery from a transcript and generate from it")
@click.option("--no-llm", is_flag=True, help="Use the template generator only")
@click.option("--provider", "-p", type=click.Choice(["openai", "anthropic"]), default=None,
              help=f"LLM provider (default: {settings.llm_provider})")
@click.option("--model", default=None, help="Model name (e.g., gpt-4o, claude-sonnet)")
@click.option("--workspace", "workspace_dir", default=None, help="Workspace directory (default: ./.sowsmith)")
@click.option("--output", "-o", "output_dir", default=None, help="Output directory (default: ./outputs)")
def generate(
    discovery_file: Optional[str],
    sample: Optional[str],
    transcript: Optional[str],
    no_llm: bool,
    provider: Optional[str],
    model: Optional[str],
    workspace_dir: Optional[str],
    output_dir: Optional[str],
):
    """Generate a SOW and Proposal and store them in the workspace."""
    sources = [s for s in (discovery_file, sample, transcript) if s]
    if len(sources) != 1:
        console.print("[red]Error: give exactly one of --discovery, --sample, --transcript[/red]")
        sys.exit(1)

    try:
        if discovery_file:
            discovery = read_discovery_file(discovery_file)
        elif sample:
            discovery = SAMPLES[sample]
        else:
            text = Path(transcript).read_text(encoding="utf-8", errors="replace")
            discovery = parse_transcript(text).to_discovery()
    except DiscoveryValidationError as e:
        print_validation_error(e)
        sys.exit(1)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: {discovery_file} is not valid JSON: {e}[/red]")
        sys.exit(1)

    console.print(Panel.fit(
        "[bold blue]SOWSmith[/bold blue]\n"
        "[dim]Statement of Work generator[/dim]",
        border_style="blue"
    ))

    manager = DraftManager(provider=provider, model=model, use_llm=False if no_llm else None)
    try:
        pair = manager.generate(discovery)
    except DiscoveryValidationError as e:
        print_validation_error(e)
        sys.exit(1)

    store = open_store(workspace_dir)
    store.set_drafts(pair)

    out = Path(output_dir or settings.get_output_path())
    out.mkdir(parents=True, exist_ok=True)
    for draft in (pair.sow, pair.proposal):
        path = out / export_filename(draft, "md")
        path.write_text(draft.markdown, encoding="utf-8")
        console.print(f"[green]Saved:[/green] {path}")

    sow = pair.sow
    console.print(f"\n[green]Backend:[/green] {manager.last_backend}")
    console.print(f"[green]Client:[/green] {sow.meta.client_name}")
    console.print(f"[green]Milestones:[/green] {len(sow.milestones)}")
    console.print(f"[green]Deliverables:[/green] {len(sow.deliverables)}")
    console.print(f"[green]Headline price:[/green] ${headline_total(sow.pricing):,.0f} ({sow.pricing.model.value})")


@cli.command(name="export")
@click.option("--doc", type=click.Choice(["sow", "proposal"]), default="sow", help="Which draft to export")
@click.option("--format", "fmt", type=click.Choice(sorted(EXPORTERS)), default="txt", help="Export format")
@click.option("--workspace", "workspace_dir", default=None, help="Workspace directory")
@click.option("--output", "-o", "output_dir", default=None, help="Output directory (default: ./outputs)")
def export_cmd(doc: str, fmt: str, workspace_dir: Optional[str], output_dir: Optional[str]):
    """Export a stored draft as txt, md or printable html."""
    store = open_store(workspace_dir)
    try:
        draft = store.get_document(doc)
    except KeyError:
        console.print(f"[red]Error: no {doc} in workspace; run generate first[/red]")
        sys.exit(1)

    path = export_document(draft, fmt, output_dir or settings.get_output_path())
    console.print(f"[green]Exported:[/green] {path}")


@cli.command()
@click.option("--doc", type=click.Choice(["sow", "proposal"]), default="sow")
@click.option("--set", "new_status", type=click.Choice([s.value for s in DocumentStatus]), default=None,
              help="Move the draft forward to this status")
@click.option("--workspace", "workspace_dir", default=None, help="Workspace directory")
def status(doc: str, new_status: Optional[str], workspace_dir: Optional[str]):
    """Show or advance a draft's review status."""
    store = open_store(workspace_dir)
    try:
        draft = store.get_document(doc)
        if new_status:
            draft = store.update_status(doc, new_status)
    except KeyError:
        console.print(f"[red]Error: no {doc} in workspace; run generate first[/red]")
        sys.exit(1)
    except StatusTransitionError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    console.print(f"[bold]{draft.meta.title}[/bold]")
    console.print(f"  [dim]Status:[/dim] {draft.status.value}")
    console.print(f"  [dim]Versions:[/dim] {len(store.versions_for(draft.id))}")
    console.print(f"  [dim]Pending changes:[/dim] {len(store.pending_changes())}")


@cli.command()
@click.option("--doc", type=click.Choice(["sow", "proposal"]), default="sow")
@click.option("--description", "-d", required=True, help="What this snapshot captures")
@click.option("--workspace", "workspace_dir", default=None, help="Workspace directory")
def snapshot(doc: str, description: str, workspace_dir: Optional[str]):
    """Save a version snapshot of a draft."""
    store = open_store(workspace_dir)
    try:
        draft = store.get_document(doc)
    except KeyError:
        console.print(f"[red]Error: no {doc} in workspace; run generate first[/red]")
        sys.exit(1)
    version = store.add_version(draft, description)
    console.print(f"[green]Saved version:[/green] {version.id}")


@cli.command()
@click.option("--workspace", "workspace_dir", default=None, help="Workspace directory")
def reset(workspace_dir: Optional[str]):
    """Clear the stored workspace."""
    open_store(workspace_dir).reset()
    console.print("[green]Workspace cleared[/green]")


@cli.command(name="list-providers")
def list_providers_cmd():
    """List available LLM providers."""
    console.print("[bold]Available LLM Providers:[/bold]\n")
    for name, available in get_available_providers().items():
        status_text = "[green]✓ Ready[/green]" if available else "[red]✗ No API key[/red]"
        console.print(f"  {name:12} {status_text}")
    console.print("\n[dim]Set API keys via environment variables:[/dim]")
    console.print("  OPENAI_API_KEY, ANTHROPIC_API_KEY (or SOWSMITH_OPENAI_API_KEY, SOWSMITH_ANTHROPIC_API_KEY)")
    console.print("[dim]Without a key the template generator is used.[/dim]")


if __name__ == "__main__":
    cli()
