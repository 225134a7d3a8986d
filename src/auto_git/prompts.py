"""Prompt templates for commit message generation."""

from __future__ import annotations

from dataclasses import dataclass

from .scanner import ChangeKind, ChangeSet

# Closed commit type vocabulary, with the meaning given to the model
COMMIT_TYPES: dict[str, str] = {
    "feat": "new feature",
    "fix": "bug fix",
    "core": "core functionality",
    "edit": "edits/modifications",
    "del": "deletions",
    "chore": "maintenance",
    "docs": "documentation",
    "style": "formatting",
    "refactor": "code restructuring",
    "perf": "performance",
    "test": "tests",
    "ci": "CI/CD",
}

COMMIT_TYPE_NAMES: tuple[str, ...] = tuple(COMMIT_TYPES)

FORMAT_CONTRACT = (
    "Reply with exactly ONE line in the format <type>(<scope>): <subject> "
    "or <emoji> <type>(<scope>): <subject>. "
    "No code fences, no quotes, no explanations."
)


def _build_system_prompt() -> str:
    types = ", ".join(f"{name} ({desc})" for name, desc in COMMIT_TYPES.items())
    return f"""You are an expert git commit message writer. Your task is to analyze git changes and generate concise, meaningful commit messages following the Conventional Commits specification.

Guidelines:
- Use conventional commit format: <type>(<scope>): <subject>
- An optional leading emoji is allowed: <emoji> <type>(<scope>): <subject>
- Types: {types}
- The type must be one of the types above, written in lowercase
- Scope is optional
- Keep the subject line under 72 characters
- Use imperative mood ("add feature" not "added feature")
- Be specific and descriptive
- If multiple types apply, choose the most significant one

Your reply must be exactly one line containing only the commit message.
Do not wrap it in code fences, quotes or any explanatory text."""


SYSTEM_PROMPT = _build_system_prompt()


@dataclass(frozen=True)
class PromptPair:
    """System instructions and user request sent to the model."""

    system: str
    user: str


def suggest_commit_type(change_set: ChangeSet) -> str:
    """Guess a commit type from the kinds of change present.

    Only deletions suggest ``del``, pure additions ``feat``, anything
    modified ``fix``; otherwise ``chore``.
    """
    kinds = {change.kind for change in change_set.files}

    has_additions = ChangeKind.ADDED in kinds
    has_deletions = ChangeKind.DELETED in kinds
    has_modifications = ChangeKind.MODIFIED in kinds

    if has_deletions and not has_additions and not has_modifications:
        return "del"
    if has_additions and not has_modifications:
        return "feat"
    if has_modifications:
        return "fix"
    return "chore"


def build_user_prompt(change_set: ChangeSet, diff_text: str) -> str:
    """Build the user request from the change summary and the raw diff.

    The diff is passed through untouched and untruncated.
    """
    parts = [
        "Analyze the following git changes and generate an appropriate commit message:",
        "",
        "=== CHANGE SUMMARY ===",
        change_set.summary,
        "",
        f"Suggested type based on the files changed: {suggest_commit_type(change_set)}",
        "",
        "=== DIFF CONTENT ===",
        diff_text,
        "",
        "Generate a commit message following the conventional commit format.",
        FORMAT_CONTRACT,
    ]
    return "\n".join(parts)


def build_prompt(change_set: ChangeSet, diff_text: str) -> PromptPair:
    """Build the system and user prompts for one generation request."""
    return PromptPair(system=SYSTEM_PROMPT, user=build_user_prompt(change_set, diff_text))


__all__ = [
    "COMMIT_TYPES",
    "COMMIT_TYPE_NAMES",
    "FORMAT_CONTRACT",
    "PromptPair",
    "SYSTEM_PROMPT",
    "build_prompt",
    "build_user_prompt",
    "suggest_commit_type",
]
