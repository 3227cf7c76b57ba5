"""CLI for claim-compiler: readiness / narrative / adjudicate / compile commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from claim_compiler.adjudication import (
    PAYER_PROFILES,
    coerce_payer_tier,
    evaluate_acceptance,
    resolve_blocker,
    section_for_issue,
)
from claim_compiler.core.config import AppSettings, EngineConfig
from claim_compiler.core.logging_config import setup_logging
from claim_compiler.exceptions import ClaimCompilerError
from claim_compiler.models import ClaimCompilerInput
from claim_compiler.narrative import generate_narrative
from claim_compiler.readiness import DISCLAIMER_TEXT, Severity, evaluate_readiness
from claim_compiler.services import ClaimCompiler, load_snapshot

app = typer.Typer(name="claim-compiler", help="Dental claim readiness, narrative and payer acceptance")
console = Console()

_SEVERITY_STYLE = {Severity.BLOCKER: "red", Severity.WARNING: "yellow"}


def _build_settings(derive_evidence: bool) -> AppSettings:
    """Build settings, overriding env defaults with CLI flags."""
    overrides: dict = {}
    if derive_evidence:
        overrides["derive_evidence_from_documentation"] = True
    return AppSettings(engine=EngineConfig(**overrides))


def _configure_logging(settings: AppSettings, verbose: bool) -> None:
    if verbose:
        setup_logging(settings.observability.model_copy(update={"log_level": "DEBUG"}))


def _fail(exc: ClaimCompilerError) -> typer.Exit:
    console.print(f"[red]Error:[/red] {escape(str(exc))}")
    return typer.Exit(code=1)


def _load(snapshot_file: Path, compiler: ClaimCompiler) -> ClaimCompilerInput:
    try:
        snapshot = load_snapshot(snapshot_file)
    except ClaimCompilerError as exc:
        raise _fail(exc) from exc
    return compiler.prepare(snapshot)


@app.command()
def readiness(
    snapshot_file: Path = typer.Argument(..., help="Visit snapshot JSON file"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    derive_evidence: bool = typer.Option(False, "--derive-evidence", help="Treat documentation flags as evidence"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Check documentation readiness for a visit."""
    settings = _build_settings(derive_evidence)
    _configure_logging(settings, verbose)
    snapshot = _load(snapshot_file, ClaimCompiler(settings))

    result = evaluate_readiness(snapshot)
    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return

    table = Table(title="Missing Items")
    table.add_column("Severity")
    table.add_column("Kind", style="cyan")
    table.add_column("Item")
    for item in result.items:
        style = _SEVERITY_STYLE[item.severity]
        table.add_row(f"[{style}]{item.severity.value}[/{style}]", item.kind, item.label)

    if result.items:
        console.print(table)
    status_style = "green" if result.percent == 100 else "yellow"
    console.print(f"\n[bold]Readiness:[/bold] [{status_style}]{result.percent}%[/{status_style}] ({result.status.value})")
    if result.fix_next:
        console.print(f"[bold]Fix next:[/bold] {result.fix_next.label}")
    console.print(f"\n[dim]{DISCLAIMER_TEXT}[/dim]")


@app.command()
def narrative(
    snapshot_file: Path = typer.Argument(..., help="Visit snapshot JSON file"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    derive_evidence: bool = typer.Option(False, "--derive-evidence", help="Treat documentation flags as evidence"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Generate the claim narrative. Exits 1 when required inputs are missing."""
    settings = _build_settings(derive_evidence)
    _configure_logging(settings, verbose)
    snapshot = _load(snapshot_file, ClaimCompiler(settings))

    result = generate_narrative(snapshot)
    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    elif result.ok:
        console.print(f"[bold]Narrative:[/bold]\n{result.full_text}\n")
        table = Table(title="Sentence Traces")
        table.add_column("Module", style="cyan")
        table.add_column("Data refs")
        table.add_column("Sentence", max_width=60)
        for trace in result.traces or ():
            table.add_row(trace.source_module_id, ", ".join(trace.source_data_refs), trace.sentence)
        console.print(table)
    else:
        console.print("[red]Narrative blocked.[/red] Missing inputs:")
        for slot in result.missing_slots or ():
            console.print(f"  {slot.module_id}: {slot.label}")

    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def adjudicate(
    snapshot_file: Path = typer.Argument(..., help="Visit snapshot JSON file"),
    tier: Optional[str] = typer.Option(None, "--tier", "-t", help="Payer tier: GENERIC, CONSERVATIVE or STRICT"),
    as_json: bool = typer.Option(False, "--json", help="Print the decision as JSON"),
    derive_evidence: bool = typer.Option(False, "--derive-evidence", help="Treat documentation flags as evidence"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Evaluate payer acceptance. Exits 1 when the claim may not be sent."""
    settings = _build_settings(derive_evidence)
    _configure_logging(settings, verbose)
    snapshot = _load(snapshot_file, ClaimCompiler(settings))

    try:
        payer_tier = coerce_payer_tier(tier or settings.engine.default_payer_tier)
    except ClaimCompilerError as exc:
        raise _fail(exc) from exc

    story = generate_narrative(snapshot)
    decision = evaluate_acceptance(snapshot, payer_tier, story.traces or ())

    if as_json:
        typer.echo(decision.model_dump_json(indent=2))
    else:
        verdict = "[green]ALLOWED[/green]" if decision.allowed else "[red]NOT ALLOWED[/red]"
        console.print(f"[bold]{PAYER_PROFILES[payer_tier].label}:[/bold] {verdict}")
        console.print(f"Confidence: {decision.confidence_score}")
        if decision.primary_procedure_id:
            console.print(f"Primary procedure: {decision.primary_procedure_id}")

        if decision.blockers:
            table = Table(title="Blockers")
            table.add_column("Code", style="red")
            table.add_column("Message")
            table.add_column("Section")
            table.add_column("Resolution")
            for issue in decision.blockers:
                section = section_for_issue(issue)
                resolver = resolve_blocker(issue)
                table.add_row(
                    issue.code,
                    issue.message,
                    section.value if section else "-",
                    resolver.label if resolver else "-",
                )
            console.print(table)

    if not decision.allowed:
        raise typer.Exit(code=1)


@app.command(name="compile")
def compile_(
    snapshot_file: Path = typer.Argument(..., help="Visit snapshot JSON file"),
    tier: Optional[str] = typer.Option(None, "--tier", "-t", help="Payer tier: GENERIC, CONSERVATIVE or STRICT"),
    output: Optional[Path] = typer.Option(None, help="Output path for the compilation JSON"),
    derive_evidence: bool = typer.Option(False, "--derive-evidence", help="Treat documentation flags as evidence"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Run readiness, narrative and acceptance; emit the full compilation."""
    settings = _build_settings(derive_evidence)
    _configure_logging(settings, verbose)
    compiler = ClaimCompiler(settings)

    try:
        compilation = compiler.compile(load_snapshot(snapshot_file), tier)
    except ClaimCompilerError as exc:
        raise _fail(exc) from exc

    payload = compilation.model_dump_json(indent=2)
    if output:
        output.write_text(payload, encoding="utf-8")
        console.print(f"[green]Compilation saved to {output}[/green]")
    else:
        typer.echo(payload)


@app.command()
def profiles() -> None:
    """List the payer-tier profiles."""
    table = Table(title="Payer Profiles")
    table.add_column("Tier", style="cyan")
    table.add_column("Label")
    table.add_column("Required modules")
    table.add_column("Evidence")
    table.add_column("Min confidence", justify="right")
    for profile in PAYER_PROFILES.values():
        table.add_row(
            profile.id.value,
            profile.label,
            ", ".join(profile.required_module_ids),
            ", ".join(profile.required_evidence_types) or "-",
            str(profile.min_confidence_for_submission),
        )
    console.print(table)


if __name__ == "__main__":
    app()
