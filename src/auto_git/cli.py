"""CLI interface for auto-git."""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import NoReturn, TypeVar

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from . import config as config_store
from .committer import AutoCommitter, CommitOptions
from .errors import AutoGitError
from .providers import PROVIDERS, normalize_provider_name

T = TypeVar("T")

console = Console()
err_console = Console(stderr=True)


def _fail(message: object) -> NoReturn:
    err_console.print(f"[red]Error: {escape(str(message))}[/]")
    sys.exit(1)


def _guard(action: Callable[[], T], verbose: bool = False) -> T:
    """Run ``action``, turning any error into a one-line message and exit 1."""
    try:
        return action()
    except Exception as e:
        if verbose:
            err_console.print_exception()
        _fail(e)


@click.group(invoke_without_command=True)
@click.option(
    "-m",
    "--model",
    help="Model to use for this run (overrides the configured model)",
)
@click.option(
    "-y",
    "--yes",
    is_flag=True,
    help="Accept the generated message without the edit prompt",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Show the raw model reply and full tracebacks",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Suppress informational output",
)
@click.version_option(__version__)
@click.pass_context
def main(
    ctx: click.Context,
    model: str | None,
    yes: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Generate a commit message for pending changes with an LLM, then commit and push.

    \b
    Examples:
      # Scan, generate, confirm, commit and push
      auto-git

      # Skip the edit prompt
      auto-git --yes

      # Use a local Ollama server
      auto-git config set-provider ollama
      auto-git config set-endpoint http://localhost:11434
      auto-git config set-model llama3.2
    """
    if ctx.invoked_subcommand is not None:
        return

    options = CommitOptions(model=model, yes=yes, verbose=verbose, quiet=quiet)
    committer = AutoCommitter(options)
    _guard(committer.run, verbose=verbose)


@main.group()
def config() -> None:
    """Manage configuration."""


@config.command("show")
def show_config() -> None:
    """Show current configuration."""
    legacy = config_store.find_legacy_config()
    if legacy:
        err_console.print(
            f"[yellow]Warning: {escape(str(legacy))} is no longer read. "
            "Re-enter your settings with 'auto-git config set-*'.[/]"
        )
    cfg = _guard(config_store.load_config)
    console.print(f"Provider: {cfg.provider}")
    if cfg.endpoint:
        console.print(f"Endpoint: {escape(cfg.endpoint)}")
    console.print(f"Model: {escape(cfg.model)}")


@config.command("set-provider")
@click.argument("provider")
def set_provider(provider: str) -> None:
    """Set the LLM provider (ollama, siliconflow, openai)."""
    try:
        name = normalize_provider_name(provider)
    except AutoGitError:
        _fail(
            f"Invalid provider: {provider.strip().lower()} (supported: {', '.join(PROVIDERS)})"
        )
    _guard(lambda: config_store.set_provider(name))
    console.print(f"Provider set to: {name}")


@config.command("set-endpoint")
@click.argument("endpoint")
def set_endpoint(endpoint: str) -> None:
    """Set the API endpoint URL."""
    endpoint = endpoint.strip()
    _guard(lambda: config_store.set_endpoint(endpoint))
    console.print(f"Endpoint set to: {escape(endpoint)}")


@config.command("set-model")
@click.argument("model", required=False)
def set_model(model: str | None) -> None:
    """Set the default model, choosing from the provider's list."""
    committer = AutoCommitter()
    selected = _guard(lambda: committer.choose_default_model(model))
    console.print(f"Model set to: {escape(selected)}")


if __name__ == "__main__":
    main()
