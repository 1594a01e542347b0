"""
Command-line interface for Kodiary.

Provides commands for:
- Correcting a diary entry against the live API
- Previewing the exact prompt that would be sent
- Listing supported languages
- Managing the OpenAI API key

Usage:
    kodiary analyze --text "Yesterday I go to school." --lang en --explain ko
    kodiary prompt --text "어제 학교에 갔다" --lang ko --explain en
    kodiary languages
    kodiary keys set
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from kodiary import __version__
from kodiary.client import CorrectionClient
from kodiary.config import ClientConfig
from kodiary.errors import CorrectionError
from kodiary.keys import SERVICES, KeyManager, env_var_for
from kodiary.models import corrections_to_json, sort_by_occurrence
from kodiary.prompts.builder import build_messages
from kodiary.prompts.catalog import (
    DEFAULT_CORRECTION_LANGUAGE,
    DEFAULT_EXPLANATION_LANGUAGE,
    LANGUAGE_PACKS,
    is_supported_language,
    language_name,
)

app = typer.Typer(
    name="kodiary",
    help="Kodiary: AI correction for foreign-language diaries",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"Kodiary v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Enable debug logging",
    ),
):
    """Kodiary: AI correction for foreign-language diaries."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _read_text(input_text: Optional[str], input_file: Optional[Path]) -> str:
    if input_file:
        return input_file.read_text(encoding="utf-8")
    if input_text is not None:
        return input_text
    console.print("[red]Error:[/] Provide either --text or --input", style="bold")
    raise typer.Exit(1)


def _warn_unsupported(*codes: str) -> None:
    for code in codes:
        if not is_supported_language(code):
            console.print(f"[yellow]Unsupported language '{code}', using English defaults[/]")


@app.command()
def analyze(
    input_text: Optional[str] = typer.Option(
        None, "--text", "-t",
        help="Diary text to correct",
    ),
    input_file: Optional[Path] = typer.Option(
        None, "--input", "-i",
        help="Read the diary text from a file",
    ),
    correction_lang: str = typer.Option(
        DEFAULT_CORRECTION_LANGUAGE, "--lang", "-l",
        help="Language the diary is written in",
    ),
    explanation_lang: str = typer.Option(
        DEFAULT_EXPLANATION_LANGUAGE, "--explain", "-e",
        help="Language for explanations",
    ),
    as_json: bool = typer.Option(
        False, "--json",
        help="Print corrections as JSON",
    ),
):
    """Correct a diary entry."""
    text = _read_text(input_text, input_file)
    _warn_unsupported(correction_lang, explanation_lang)

    config = ClientConfig.from_env()
    if not config.has_valid_api_key:
        console.print("[yellow]No valid API key configured; showing placeholder output.[/]")
        console.print("Set one with: [cyan]kodiary keys set[/]\n")

    with CorrectionClient(config) as client:
        try:
            with console.status("[dim]Requesting corrections...[/]"):
                items = client.analyze(text, correction_lang, explanation_lang)
        except CorrectionError as e:
            console.print(f"[red]Error:[/] {e.localized_message(explanation_lang)}")
            raise typer.Exit(1)

    items = sort_by_occurrence(text, items)

    if as_json:
        typer.echo(corrections_to_json(items, indent=2))
        return

    if not items:
        console.print("[green]No corrections needed.[/]")
        return

    table = Table(title=f"Corrections ({language_name(correction_lang, explanation_lang)})")
    table.add_column("Type", style="magenta")
    table.add_column("Original", style="red")
    table.add_column("Corrected", style="green")
    table.add_column("Explanation")
    for item in items:
        table.add_row(item.type, item.original, item.corrected, item.explanation)
    console.print(table)


@app.command()
def prompt(
    input_text: Optional[str] = typer.Option(
        None, "--text", "-t",
        help="Diary text to embed in the prompt",
    ),
    input_file: Optional[Path] = typer.Option(
        None, "--input", "-i",
        help="Read the diary text from a file",
    ),
    correction_lang: str = typer.Option(
        DEFAULT_CORRECTION_LANGUAGE, "--lang", "-l",
        help="Language the diary is written in",
    ),
    explanation_lang: str = typer.Option(
        DEFAULT_EXPLANATION_LANGUAGE, "--explain", "-e",
        help="Language for explanations",
    ),
):
    """Show the chat messages that would be sent, without calling the API."""
    text = _read_text(input_text, input_file)
    _warn_unsupported(correction_lang, explanation_lang)

    for message in build_messages(text, correction_lang, explanation_lang):
        console.print(f"\n[bold cyan]{message.role}:[/]\n")
        console.print(message.content, markup=False)
    console.print()


@app.command()
def languages(
    explanation_lang: str = typer.Option(
        DEFAULT_EXPLANATION_LANGUAGE, "--explain", "-e",
        help="Language to display the names in",
    ),
):
    """List supported languages."""
    table = Table(title="Supported Languages")
    table.add_column("Code", style="cyan")
    table.add_column("Native name", style="green")
    table.add_column("Name")
    table.add_column("Grammar / Spelling / Expression", style="dim")

    for code, pack in LANGUAGE_PACKS.items():
        table.add_row(
            code,
            pack.native_name,
            language_name(code, explanation_lang),
            " / ".join(pack.type_labels),
        )

    console.print(table)

keys_app = typer.Typer(
    name="keys",
    help="Manage the API key used for live corrections.",
    no_args_is_help=True,
)
app.add_typer(keys_app, name="keys")


def _known_service(service: str) -> str:
    if service not in SERVICES:
        console.print(f"[red]Error:[/] Unknown service '{service}'")
        console.print(f"Known services: {', '.join(SERVICES)}")
        raise typer.Exit(1)
    return service


ServiceArg = typer.Argument("openai", help="Service name", callback=_known_service)


@keys_app.command("list")
def keys_list():
    """Show where each known key is stored."""
    table = Table(title="API Keys")
    table.add_column("Service", style="cyan")
    table.add_column("Env var", style="dim")
    table.add_column("Source", style="yellow")
    table.add_column("Value")

    for info in KeyManager().list_keys():
        value = info.masked_value if info.is_set else "[red]not set[/]"
        table.add_row(info.service, env_var_for(info.service), info.source, value)

    console.print(table)
    console.print("[dim]Lookup order: environment, keychain, config file[/]")


@keys_app.command("set")
def keys_set(service: str = ServiceArg):
    """Prompt for a key and store it."""
    key = typer.prompt(f"API key for {service}", hide_input=True, default="", show_default=False)
    if not key.strip():
        console.print("[red]Error:[/] Key cannot be empty")
        raise typer.Exit(1)

    km = KeyManager()
    storage = km.set_key(service, key.strip())
    console.print(f"[green]✓[/] Saved {service} key to {storage}")
    if storage == "config":
        console.print(f"[yellow]Note:[/] no keychain available, key written to {km.config_file}")


@keys_app.command("status")
def keys_status(service: str = ServiceArg):
    """Report whether a key is configured."""
    info = KeyManager().get_key_info(service)
    if info.is_set:
        console.print(f"[green]✓[/] {service}: {info.masked_value} (from {info.source})")
        return

    console.print(f"[red]✗[/] No key configured for {service}")
    console.print(f"Run [cyan]kodiary keys set {service}[/] or export {env_var_for(service)}")


@keys_app.command("delete")
def keys_delete(service: str = ServiceArg):
    """Remove a stored key from the keychain and the config file."""
    if KeyManager().delete_key(service):
        console.print(f"[green]✓[/] Deleted {service} key")
    else:
        console.print(f"[yellow]Nothing stored for {service}[/]")


if __name__ == "__main__":
    app()
