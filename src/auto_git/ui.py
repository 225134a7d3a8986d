"""Terminal presentation: change listing, spinner and operator prompts."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import IntPrompt, Prompt

from .errors import EditCancelledError
from .providers import ModelInfo
from .scanner import ChangeSet, FileChange


@contextmanager
def spinner(console: Console, message: str) -> Iterator[None]:
    """Show a spinner while the body runs.

    The refresh thread is stopped and joined before the block exits, so
    nothing printed afterwards can interleave with it.
    """
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
        disable=console.quiet,
    ) as progress:
        progress.add_task(message, total=None)
        yield


@contextmanager
def interactive(console: Console) -> Iterator[Console]:
    """Lift ``--quiet`` while the operator is being asked something.

    A quiet console would still block on input without drawing the prompt.
    """
    quiet = console.quiet
    console.quiet = False
    try:
        yield console
    finally:
        console.quiet = quiet


def _format_change(change: FileChange) -> str:
    return f"  [green]+{change.additions}[/] [red]-{change.deletions}[/] {escape(change.path)}"


def render_changes(change_set: ChangeSet) -> str:
    """Colored counterpart of the plain change summary, as rich markup."""
    lines: list[str] = []
    for title, group in (("Staged", change_set.staged), ("Unstaged", change_set.unstaged)):
        if not group:
            continue
        lines.append(f"[yellow]{title}[/]: {len(group)} file(s)")
        lines.extend(_format_change(change) for change in group)
    return "\n".join(lines)


def mask_api_key(key: str, visible: int = 4) -> str:
    """Hide all but the last ``visible`` characters of an API key."""
    if len(key) <= visible:
        return key
    return "*" * (len(key) - visible) + key[-visible:]


def select_model(console: Console, models: Sequence[ModelInfo], default: str) -> str:
    """Let the operator pick a model from a numbered list.

    Args:
        console: Console to draw on
        models: Available models (must not be empty)
        default: Name preselected when the operator just presses enter

    Returns:
        The chosen model name
    """
    default_index = next((i for i, m in enumerate(models) if m.name == default), 0)

    try:
        with interactive(console):
            console.print("[bold]Select Model[/]")
            for i, model in enumerate(models):
                marker = ">" if i == default_index else " "
                detail = model.describe()
                line = f"{marker} {i + 1}. {escape(model.name)}"
                if detail:
                    line += f" [dim]({detail})[/]"
                console.print(f"[magenta]{line}[/]" if i == default_index else line)

            while True:
                choice = IntPrompt.ask("Model number", default=default_index + 1, console=console)
                if 1 <= choice <= len(models):
                    return models[choice - 1].name
                console.print(f"[red]Please enter a number between 1 and {len(models)}[/]")
    except (KeyboardInterrupt, EOFError) as e:
        raise EditCancelledError("Model selection cancelled") from e


def edit_commit_message(console: Console, initial: str = "") -> str:
    """Ask the operator to confirm, edit or type the commit message.

    Pressing enter keeps ``initial``.

    Raises:
        EditCancelledError: If the operator aborts the prompt
    """
    try:
        with interactive(console):
            if initial:
                return Prompt.ask("Commit message", default=initial, console=console)
            return Prompt.ask("Commit message", console=console)
    except (KeyboardInterrupt, EOFError) as e:
        raise EditCancelledError("Message editing cancelled") from e


__all__ = [
    "edit_commit_message",
    "interactive",
    "mask_api_key",
    "render_changes",
    "select_model",
    "spinner",
]
