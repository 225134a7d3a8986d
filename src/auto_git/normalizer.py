"""Turn a raw model reply into a single conventional commit subject.

The model is asked for one line, but replies routinely arrive wrapped in
code fences, prefixed with a label, spread over several lines or with a
type outside the allowed vocabulary. ``normalize`` repairs the format
problems it can recognise and reports an empty subject when nothing usable
is left, in which case the operator has to type the message.

Normalizing is deterministic and idempotent: feeding a normalized subject
back in returns it unchanged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .prompts import COMMIT_TYPE_NAMES

FENCE = "```"
LABEL_PREFIX = "commit message:"
DEFAULT_TYPE = "chore"

# Messages starting with one of these are left alone even when malformed
RESERVED_PREFIXES = ("chore", "feat", "fix")

_TOKEN_RE = re.compile(r"\S+")


@dataclass(frozen=True)
class NormalizedSubject:
    """Result of normalizing a model reply. Empty text means "ask the operator"."""

    text: str = ""

    @property
    def needs_manual_entry(self) -> bool:
        return not self.text

    def __str__(self) -> str:
        return self.text


def _strip_label(line: str) -> str:
    while line[: len(LABEL_PREFIX)].lower() == LABEL_PREFIX:
        line = line[len(LABEL_PREFIX) :].strip()
    return line


def extract_candidate_line(raw: str) -> str:
    """Pick the single candidate line out of a reply and strip its wrapping.

    Args:
        raw: Reply text exactly as returned by the model

    Returns:
        The candidate line, or "" if the reply holds nothing usable
    """
    lines = raw.strip().splitlines()
    if not lines:
        return ""

    candidate = _strip_label(lines[0].strip())

    # An opening fence on the first line: the message is on the next one
    if candidate.startswith(FENCE):
        if len(lines) < 2:
            return ""
        candidate = _strip_label(lines[1].strip())
        # A second fence can't be promoted again, so nothing usable is left
        if candidate.startswith(FENCE):
            return ""

    while candidate.endswith(FENCE):
        candidate = candidate[: -len(FENCE)].rstrip()

    return candidate


def is_emoji_token(token: str) -> bool:
    """Heuristic: a single code point, or anything containing non-ASCII."""
    return len(token) == 1 or not token.isascii()


def extract_type_name(token: str) -> str:
    """Return the part of ``token`` before its first ``(`` or ``:``."""
    cut = len(token)
    for delimiter in ("(", ":"):
        pos = token.find(delimiter)
        if pos != -1:
            cut = min(cut, pos)
    return token[:cut]


def repair_commit_type(message: str) -> str:
    """Validate the commit type of ``message`` and repair it if possible.

    A type that matches the vocabulary in any casing is rewritten to its
    lowercase spelling, leaving scope and description untouched. A message
    with no recognisable type gets ``chore: `` prepended, unless it already
    starts with chore, feat or fix, in which case it is returned as is.
    """
    tokens = list(_TOKEN_RE.finditer(message))
    if not tokens:
        return message

    index = 1 if is_emoji_token(tokens[0].group()) else 0
    if index < len(tokens):
        token = tokens[index]
        name = extract_type_name(token.group())
        canonical = name.lower()
        if canonical in COMMIT_TYPE_NAMES:
            if name == canonical:
                return message
            start = token.start()
            return message[:start] + canonical + message[start + len(name) :]

    if not message.lower().startswith(RESERVED_PREFIXES):
        return f"{DEFAULT_TYPE}: {message}"

    return message


def normalize(raw: str) -> NormalizedSubject:
    """Normalize a raw model reply into a commit subject.

    Args:
        raw: Reply text exactly as returned by the model

    Returns:
        The normalized subject; its text is empty when manual entry is needed
    """
    candidate = extract_candidate_line(raw)
    if not candidate:
        return NormalizedSubject()
    return NormalizedSubject(repair_commit_type(candidate))


__all__ = [
    "DEFAULT_TYPE",
    "NormalizedSubject",
    "extract_candidate_line",
    "extract_type_name",
    "is_emoji_token",
    "normalize",
    "repair_commit_type",
]
