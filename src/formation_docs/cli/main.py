"""CLI for formation-docs: generate / forms / serve commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from formation_docs.core.config import AppSettings, FetchConfig
from formation_docs.engine import DocumentGenerationEngine
from formation_docs.forms.registry import SS4, articles_spec, normalize_state

app = typer.Typer(name="formation-docs", help="Generate EIN applications and Articles of Organization")
console = Console()


def _build_settings(offline: bool, timeout: Optional[float]) -> AppSettings:
    """Build settings, overriding env defaults with CLI flags."""
    settings = AppSettings()
    overrides: dict = {}
    if offline:
        overrides["enabled"] = False
    if timeout is not None:
        overrides["timeout_seconds"] = timeout
    if overrides:
        settings.fetch = FetchConfig(**{**settings.fetch.model_dump(), **overrides})
    return settings


@app.command()
def generate(
    intake_file: Path = typer.Argument(..., help="JSON file with the business intake"),
    out: Path = typer.Option(Path("."), "--out", "-o", help="Directory for generated documents"),
    offline: bool = typer.Option(False, "--offline", help="Skip template downloads and synthesize every form"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Template download timeout in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Generate the filing documents for an intake and write them to disk."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)

    raw = json.loads(intake_file.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise typer.BadParameter(f"Expected a JSON object in {intake_file}")

    engine = DocumentGenerationEngine(_build_settings(offline, timeout))
    result = engine.generate_sync(raw)

    if not result.documents and not result.ok:
        console.print(f"[red]{result.error}[/red]")
        raise typer.Exit(code=1)

    out.mkdir(parents=True, exist_ok=True)
    table = Table(title="Generated Documents")
    table.add_column("Form", style="cyan")
    table.add_column("Method")
    table.add_column("File")
    for form_id, document in result.documents.items():
        path = out / document.filename
        path.write_bytes(document.payload())
        table.add_row(form_id, document.method, str(path))
    console.print(table)

    if not result.ok:
        console.print(f"[red]{result.error}[/red]")
        raise typer.Exit(code=1)


@app.command()
def forms(
    entity_type: str = typer.Option(..., "--entity-type", help="Entity type, e.g. LLC or Corp"),
    state: str = typer.Option("", "--state", help="Formation state code or name"),
) -> None:
    """Show which form configurations an entity/state pair would use."""
    table = Table(title=f"Forms for {entity_type} / {normalize_state(state) or '?'}")
    table.add_column("Form", style="cyan")
    table.add_column("Spec")
    table.add_column("Template")
    table.add_column("Filename")

    for spec in (SS4, articles_spec(entity_type, state)):
        table.add_row(spec.form_type.value, spec.key, spec.template_url or "(synthesized)", spec.filename)
    console.print(table)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host"),
    port: Optional[int] = typer.Option(None, "--port"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    api = AppSettings().api
    uvicorn.run("formation_docs.api.app:app", host=host or api.host, port=port or api.port)


if __name__ == "__main__":
    app()
