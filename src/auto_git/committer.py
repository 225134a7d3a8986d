"""Main AutoCommitter class: scan, generate, confirm, commit and push."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from . import config as config_store
from .config import Config
from .errors import (
    AutoGitError,
    ConfigLoadError,
    EmptyReplyError,
    EmptySubjectError,
    ModelListError,
)
from .git import GitRepo
from .normalizer import normalize
from .prompts import build_prompt
from .providers import ModelInfo, Provider, api_key_env_var, create_provider, get_api_key
from .scanner import ChangeSet, read_diff_text, scan
from .sequencer import finalize_and_push
from .ui import (
    edit_commit_message,
    interactive,
    mask_api_key,
    render_changes,
    select_model,
    spinner,
)


@dataclass
class CommitOptions:
    """Options for one auto-git run."""

    model: str | None = None
    yes: bool = False
    verbose: bool = False
    quiet: bool = False


class AutoCommitter:
    """Generates a commit subject for pending changes and records it."""

    def __init__(
        self,
        options: CommitOptions | None = None,
        repo_path: str | Path | None = None,
        console: Console | None = None,
        config_path: Path | None = None,
    ) -> None:
        """Initialize the committer.

        Args:
            options: Run options
            repo_path: Path inside the git working tree (defaults to cwd)
            console: Console for output (created from options if None)
            config_path: Config file location (defaults to the user config)
        """
        self.options = options or CommitOptions()
        self.console = console or Console(quiet=self.options.quiet)
        self.repo = GitRepo(repo_path)
        self.config_path = config_path
        self._provider: Provider | None = None

    def _load_config(self) -> Config:
        legacy = config_store.find_legacy_config(self.config_path)
        if legacy:
            self.console.print(
                f"[yellow]Warning: {escape(str(legacy))} is no longer read. "
                "Re-enter your settings with 'auto-git config set-*'.[/]"
            )
        return config_store.load_config(self.config_path)

    def _get_provider(self, config: Config) -> Provider:
        """Lazily create and return the configured provider."""
        if self._provider is None:
            api_key = get_api_key(config.provider)
            self._provider = create_provider(config.provider, config.endpoint, api_key)
            self._report_auth(config.provider, api_key)
        return self._provider

    def _report_auth(self, provider: str, api_key: str) -> None:
        env_var = api_key_env_var(provider)
        if not api_key:
            self.console.print(
                f"[dim]Connecting to {provider} without {env_var} "
                "(requests may be unauthenticated).[/]"
            )
        else:
            self.console.print(
                f"[dim]Using {env_var} for authentication ({mask_api_key(api_key)})[/]"
            )

    def connect(self, config: Config) -> Provider:
        """Create the provider and make sure it is reachable."""
        provider = self._get_provider(config)
        with spinner(self.console, f"Connecting to {config.provider}..."):
            provider.check_connection()
        return provider

    def fetch_models(self, provider: Provider) -> list[ModelInfo]:
        with spinner(self.console, "Fetching available models..."):
            return provider.list_models()

    def resolve_model(self, provider: Provider, config: Config) -> str:
        """Pick the model for this run.

        An explicitly requested model is used as is. Otherwise the configured
        model is checked against the provider's list; if it is missing the
        operator chooses one and the choice is saved.
        """
        if self.options.model:
            return self.options.model

        selected = config.model
        try:
            models = self.fetch_models(provider)
        except ModelListError as e:
            self.console.print(
                f"[yellow]Warning: Could not list models: {e}. "
                f"Using configured model: {escape(selected)}[/]"
            )
            return selected

        if models and selected not in {m.name for m in models}:
            with interactive(self.console):
                self.console.print(f"Model '{escape(selected)}' not found. Please select a model:")
            selected = select_model(self.console, models, models[0].name)
            try:
                config_store.set_model(selected, self.config_path)
            except ConfigLoadError as e:
                self.console.print(
                    f"[yellow]Warning: failed to save model preference: {e}[/]"
                )
        return selected

    def choose_default_model(self, requested: str | None = None) -> str:
        """Pick and save the default model for ``config set-model``.

        A requested model that the provider lists is saved directly. An
        unlisted or missing name opens the selection list. When the list is
        unavailable the requested name is saved without checking.

        Raises:
            AutoGitError: If no model can be determined
        """
        config = self._load_config()
        provider = self.connect(config)

        try:
            models = self.fetch_models(provider)
        except ModelListError as e:
            self.console.print(f"[yellow]Warning: Could not list models: {e}[/]")
            models = []

        if not models:
            if not requested:
                raise AutoGitError(
                    "No models available. Please provide a model name: "
                    "auto-git config set-model <model-name>"
                )
            selected = requested
        elif requested in {m.name for m in models}:
            selected = requested
        else:
            if requested:
                with interactive(self.console):
                    self.console.print(
                        f"Model '{escape(requested)}' not found. Please select a model:"
                    )
            selected = select_model(self.console, models, config.model)

        config_store.set_model(selected, self.config_path)
        return selected

    def generate_subject(
        self,
        provider: Provider,
        model: str,
        change_set: ChangeSet,
        diff: str,
    ) -> str:
        """Ask the model for a subject and normalize it ("" if none usable)."""
        prompts = build_prompt(change_set, diff)
        try:
            with spinner(self.console, "Generating commit message..."):
                raw = provider.generate_commit_message(model, prompts.system, prompts.user)
        except EmptyReplyError:
            return ""

        if self.options.verbose:
            self.console.print(f"[dim]Raw reply:[/]\n[dim]{escape(raw)}[/]")

        return normalize(raw).text

    def confirm_subject(self, subject: str) -> str:
        """Let the operator confirm or edit the subject, or type one if empty.

        Raises:
            EmptySubjectError: If the final subject is blank
            EditCancelledError: If the operator aborts the prompt
        """
        if not subject:
            with interactive(self.console):
                self.console.print(
                    "[yellow]Generated commit message is empty. "
                    "Please enter a commit message manually:[/]"
                )
            subject = edit_commit_message(self.console)
        elif self.options.yes:
            self.console.print(f"\n[bold]Generated commit message:[/]\n{escape(subject)}\n")
        else:
            with interactive(self.console):
                self.console.print(
                    f"\n[bold]Generated commit message:[/]\n{escape(subject)}\n"
                )
            subject = edit_commit_message(self.console, subject)

        subject = subject.strip()
        if not subject:
            raise EmptySubjectError("Commit message cannot be empty")
        return subject

    def run(self) -> bool:
        """Run the whole pipeline.

        Returns:
            True if the commit was pushed to ``origin``
        """
        self.console.print("[cyan]Scanning git repository for changes...[/]")
        change_set = scan(self.repo)

        self.console.print("Changes detected:")
        self.console.print(render_changes(change_set))
        self.console.print()

        diff = read_diff_text(self.repo)

        config = self._load_config()
        provider = self.connect(config)
        model = self.resolve_model(provider, config)
        self.console.print(f"[blue]Using provider: {config.provider}, model: {escape(model)}[/]")

        subject = self.confirm_subject(self.generate_subject(provider, model, change_set, diff))

        with spinner(self.console, f"Recording git changes: {escape(subject)}"):
            pushed = finalize_and_push(self.repo, subject)

        if pushed:
            self.console.print("[green]Successfully committed and pushed![/]")
        else:
            self.console.print(
                "[green]Committed locally; remote 'origin' not configured, skipping push.[/]"
            )
        return pushed


__all__ = ["AutoCommitter", "CommitOptions"]
