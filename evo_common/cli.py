#!/usr/bin/env python3
"""evo-common CLI.

Command-line tools for operators working with evo documents: validate
gateway, agent and skill TOML files, print the config hash a king would
announce, and list the event-channel vocabulary.
"""

from collections.abc import Callable
from enum import StrEnum
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .core.errors import ConfigError
from .events import EVENT_PAYLOADS, Event
from .schemas import AgentConfig, GatewayConfig, SkillConfig, SkillManifest
from .schemas.base import DocumentModel


# Initialize CLI and console
app = typer.Typer(help="evo network contract tools")
console = Console()


class DocumentKind(StrEnum):
    GATEWAY = "gateway"
    AGENT = "agent"
    SKILL_MANIFEST = "skill-manifest"
    SKILL_CONFIG = "skill-config"


DOCUMENT_MODELS: dict[DocumentKind, type[DocumentModel]] = {
    DocumentKind.GATEWAY: GatewayConfig,
    DocumentKind.AGENT: AgentConfig,
    DocumentKind.SKILL_MANIFEST: SkillManifest,
    DocumentKind.SKILL_CONFIG: SkillConfig,
}


def _load(path: Path, parse: Callable[[str], DocumentModel]) -> DocumentModel:
    try:
        return parse(path.read_text(encoding="utf-8"))
    except OSError as e:
        console.print(
            f"[bold red]Cannot read {escape(str(path))}: {escape(str(e))}[/bold red]"
        )
        raise typer.Exit(1) from e
    except ConfigError as e:
        _print_config_error(path, e)
        raise typer.Exit(1) from e


def _print_config_error(path: Path, error: ConfigError) -> None:
    where = f"{path}:{error.line}" if error.line is not None else str(path)
    if error.column is not None:
        where += f":{error.column}"

    console.print(
        f"[bold red]✗ {escape(where)}: {escape(error.message)}[/bold red]", soft_wrap=True
    )
    if error.details:
        table = Table(show_header=True, header_style="bold red")
        table.add_column("Path", style="cyan")
        table.add_column("Problem", style="white")
        for detail in error.details:
            table.add_row(detail.path or "-", escape(detail.message))
        console.print(table)


@app.command()
def validate(
    kind: DocumentKind = typer.Argument(..., help="Kind of document to validate"),
    path: Path = typer.Argument(..., help="Path to the TOML document"),
    legacy: bool = typer.Option(
        False, "--legacy", help="Upgrade legacy api_key_env provider tables first"
    ),
):
    """Parse a TOML document and report the first problem found."""
    if legacy and kind is DocumentKind.GATEWAY:
        document = _load(path, GatewayConfig.from_legacy_toml)
    else:
        document = _load(path, DOCUMENT_MODELS[kind].from_toml)

    console.print(
        Panel.fit(
            f"[bold green]✓ valid {kind.value}[/bold green]\n"
            f"Hash: {document.config_hash()}",
            title=escape(str(path)),
        )
    )


@app.command("hash")
def hash_config(
    path: Path = typer.Argument(..., help="Path to the gateway TOML document"),
):
    """Print the gateway config hash announced in king:config_update."""
    document = _load(path, GatewayConfig.from_toml)
    console.print(document.config_hash(), highlight=False)


@app.command()
def events():
    """List event names and the payload model each one carries."""
    table = Table(title="Events", show_header=True, header_style="bold magenta")
    table.add_column("Event", style="cyan")
    table.add_column("Payload", style="yellow")

    for event in Event:
        model = EVENT_PAYLOADS.get(event)
        table.add_row(event.value, model.__name__ if model else "free-form JSON")

    console.print(table)


@app.callback()
def main():
    """evo network contract tools.

    Validate and hash the TOML documents shared by the king and its agents.
    """
    pass


if __name__ == "__main__":
    app()
