"""CLI entry point for repograder."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from repograder.config import RepoGraderConfig, load_config
from repograder.config.loader import DEFAULT_CONFIG_TEMPLATE
from repograder.errors import AnalysisError
from repograder.logging_setup import configure_logging
from repograder.pipeline import AnalysisPipeline, AnalysisResult
from repograder.profile import QualityProfile

app = typer.Typer(
    name="repograder",
    help="Grade a GitHub repository and get three concrete next steps.",
)

config_app = typer.Typer(help="Manage repograder configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: RepoGraderConfig | None = None

# (minimum confidence, label, colour), checked top-down
_CONFIDENCE_BANDS: list[tuple[int, str, str]] = [
    (80, "Recruiter Ready!", "cyan"),
    (60, "Getting There!", "yellow"),
    (0, "Needs Work", "red"),
]

_LEVEL_STYLES = {
    "BEGINNER": "green",
    "INTERMEDIATE": "yellow",
    "ADVANCED": "magenta",
}


def _get_config() -> RepoGraderConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to repograder.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    configure_logging(_config.log_level, _config.log_format)


def confidence_label(confidence: int) -> tuple[str, str]:
    """Return (label, colour) for a recruiter-confidence score."""
    for threshold, label, colour in _CONFIDENCE_BANDS:
        if confidence >= threshold:
            return label, colour
    return _CONFIDENCE_BANDS[-1][1], _CONFIDENCE_BANDS[-1][2]


def _display_result(result: AnalysisResult) -> None:
    """Render an analysis result as a Rich panel."""
    a = result.assessment
    label, colour = confidence_label(a.confidence)
    level_style = _LEVEL_STYLES.get(a.level.value, "white")
    actions = "\n".join(f"  {i}. {escape(action)}" for i, action in enumerate(a.next_actions, 1))
    panel_text = (
        f"[bold]{result.repo}[/bold]\n\n"
        f"[dim]Recruiter confidence:[/dim] [bold {colour}]{a.confidence}%[/bold {colour}]"
        f" ({label})\n"
        f"[dim]Level:[/dim]                [bold {level_style}]{a.level.value}[/bold {level_style}]\n\n"
        f"[bold]Summary[/bold]\n{escape(a.summary)}\n\n"
        f"[bold]Your next 3 actions[/bold]\n{actions}\n\n"
        f"[dim]{result.url}[/dim]"
    )
    rprint(Panel(panel_text, title="Analysis Results", border_style="blue"))


def _display_profile(repo: str, profile: QualityProfile) -> None:
    """Display the quality profile as a two-column table."""
    table = Table(title=f"Quality profile: {repo}")
    table.add_column("Signal", style="cyan")
    table.add_column("Value")
    for name, value in profile.model_dump().items():
        if name == "readme_preview":
            continue
        if isinstance(value, list):
            value = " | ".join(value) or "-"
        table.add_row(name, escape(str(value)))
    rprint(table)


def _resolve_api_key(cfg: RepoGraderConfig, api_key: str | None) -> str:
    key = api_key or os.environ.get(cfg.llm.api_key_env)
    if not key:
        rprint(
            "[red]Error:[/red] an API key is required. "
            f"Pass --api-key or set {cfg.llm.api_key_env}."
        )
        raise typer.Exit(1)
    return key


@app.command()
def analyze(
    repo: str = typer.Argument(..., help="Repository URL, e.g. https://github.com/owner/repo"),
    api_key: str | None = typer.Option(
        None, "--api-key", "-k", help="Text-generation API key (defaults to llm.api_key_env)"
    ),
    github_token: str | None = typer.Option(
        None, "--github-token", help="GitHub token (defaults to vcs.token_env)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Analyze a repository and print its assessment."""
    cfg = _get_config()
    key = _resolve_api_key(cfg, api_key)
    pipeline = AnalysisPipeline(cfg)

    try:
        result = asyncio.run(pipeline.run(repo, key, hosting_token=github_token))
    except AnalysisError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        _display_result(result)


@app.command()
def profile(
    repo: str = typer.Argument(..., help="Repository URL, e.g. https://github.com/owner/repo"),
    github_token: str | None = typer.Option(
        None, "--github-token", help="GitHub token (defaults to vcs.token_env)"
    ),
) -> None:
    """Fetch a repository and show its quality profile, without an assessment."""
    cfg = _get_config()
    pipeline = AnalysisPipeline(cfg)

    try:
        identifier = pipeline.parse(repo)
        quality = asyncio.run(pipeline.build_profile(repo, hosting_token=github_token))
    except AnalysisError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    _display_profile(identifier.full_name, quality)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default repograder.yaml in current directory."""
    target = Path("repograder.yaml")
    if target.exists() and not force:
        rprint("[yellow]repograder.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
