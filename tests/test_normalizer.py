import pytest

from auto_git.normalizer import (
    extract_candidate_line,
    extract_type_name,
    is_emoji_token,
    normalize,
    repair_commit_type,
)


def test_valid_message_is_unchanged():
    assert normalize("feat: add login").text == "feat: add login"


def test_type_case_is_repaired_and_scope_kept():
    assert normalize("FIX(ui): repair button").text == "fix(ui): repair button"


def test_unknown_type_defaults_to_chore():
    assert normalize("update stuff").text == "chore: update stuff"


def test_fences_are_stripped():
    assert normalize("```\nfeat: add x\n```").text == "feat: add x"


@pytest.mark.parametrize("raw", ["", "   ", "\n\n", "```", "commit message:"])
def test_nothing_usable_requests_manual_entry(raw):
    subject = normalize(raw)
    assert subject.text == ""
    assert subject.needs_manual_entry


def test_label_prefix_is_stripped_case_insensitively():
    assert normalize("Commit message: feat: add x").text == "feat: add x"
    assert normalize("COMMIT MESSAGE: Docs: tweak readme").text == "docs: tweak readme"


def test_only_first_line_is_kept():
    raw = "feat(api): add endpoint\n\nThis adds a new endpoint for users."
    assert normalize(raw).text == "feat(api): add endpoint"


def test_trailing_fence_is_stripped():
    assert normalize("fix: handle nil```").text == "fix: handle nil"


def test_emoji_prefix_keeps_type_validation():
    assert normalize("✨ Feat(api): add endpoint").text == "✨ feat(api): add endpoint"
    assert normalize("🐛 fix: null check").text == "🐛 fix: null check"


def test_emoji_without_type_gets_default():
    assert normalize("🎉 initial import").text == "chore: 🎉 initial import"
    assert normalize("🎉").text == "chore: 🎉"


def test_type_without_delimiter_is_lowercased():
    assert normalize("Refactor parser internals").text == "refactor parser internals"


def test_reserved_prefix_in_odd_shape_is_left_alone():
    assert normalize("featuring a new parser").text == "featuring a new parser"
    assert normalize("Fixes #12 crash on start").text == "Fixes #12 crash on start"


def test_inner_spacing_is_preserved():
    assert normalize("DOCS:  two  spaces").text == "docs:  two  spaces"


@pytest.mark.parametrize(
    "raw",
    [
        "feat: add login",
        "FIX(ui): repair button",
        "update stuff",
        "```\nfeat: add x\n```",
        "Commit message: ```\nperf: speed up\n```",
        "```\n```\n",
        "✨ Feat(api): add endpoint",
        "🎉",
        "- feat: dash first",
        "featuring a new parser",
        "(core): missing type",
        "x``````",
        "```\n```✨ fix: y```",
        "```\ncommit message: docs: readme\n```",
        "",
        "  \t ",
    ],
)
def test_normalize_is_idempotent(raw):
    once = normalize(raw).text
    assert normalize(once).text == once


def test_extract_candidate_promotes_line_after_opening_fence():
    assert extract_candidate_line("```text\nci: cache deps\n```") == "ci: cache deps"
    assert extract_candidate_line("```\nCommit message: docs: readme\n```") == "docs: readme"


def test_fence_on_promoted_line_needs_manual_entry():
    assert normalize("```\n```✨ fix: y```").needs_manual_entry
    assert extract_candidate_line("```\n```python") == ""


def test_extract_type_name_stops_at_first_delimiter():
    assert extract_type_name("feat(api):") == "feat"
    assert extract_type_name("fix:") == "fix"
    assert extract_type_name("chore") == "chore"
    assert extract_type_name("a:b(c)") == "a"


@pytest.mark.parametrize(
    "token, expected",
    [("✨", True), ("-", True), ("🎉🎉", True), ("feat:", False), ("ab", False)],
)
def test_is_emoji_token(token, expected):
    assert is_emoji_token(token) is expected


def test_repair_commit_type_leaves_valid_types():
    assert repair_commit_type("style: format code") == "style: format code"
    assert repair_commit_type("del(old): remove legacy api") == "del(old): remove legacy api"
