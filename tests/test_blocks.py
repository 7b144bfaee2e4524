"""Tests for conditional tag block resolution."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from tests.conftest import write_tree
from theme_builder import blocks
from theme_builder.blocks import keeps_body, resolve_tag
from theme_builder.substitution import FileSet

TEMPLATE = "head\n{{{VIP}}}\nvip body\n{{{/VIP}}}\nmiddle\n{{{VIP}}}second{{{/VIP}}}\ntail\n"
STRIPPED = "head\n\nvip body\n\nmiddle\nsecond\ntail\n"
DELETED = "head\n\nmiddle\n\ntail\n"


@pytest.fixture
def vip_file(tmp_path: Path) -> FileSet:
    write_tree(tmp_path, {"functions.php": TEMPLATE})
    return FileSet(root=tmp_path, extensions=("php",), excluded=())


@pytest.mark.parametrize(
    ("decision", "inverse", "expected"),
    [
        (True, False, False),
        (False, False, True),
        (True, True, True),
        (False, True, False),
    ],
)
def test_keeps_body_truth_table(decision: bool, inverse: bool, expected: bool) -> None:
    assert keeps_body(decision, inverse) is expected


@pytest.mark.parametrize(
    ("decision", "inverse", "expected"),
    [
        (True, False, DELETED),
        (False, False, STRIPPED),
        (True, True, STRIPPED),
        (False, True, DELETED),
    ],
)
def test_resolve_tag(vip_file: FileSet, decision: bool, inverse: bool, expected: str) -> None:
    resolve_tag("VIP", decision, vip_file, inverse=inverse)
    assert (vip_file.root / "functions.php").read_text() == expected


def test_resolve_tag_only_touches_named_tag(tmp_path: Path) -> None:
    write_tree(tmp_path, {"header.php": "{{{GULP}}}a{{{/GULP}}}\n{{{NONGULP}}}b{{{/NONGULP}}}\n"})
    file_set = FileSet(root=tmp_path, extensions=("php",), excluded=())

    resolve_tag("GULP", False, file_set, inverse=True)

    assert (tmp_path / "header.php").read_text() == "\n{{{NONGULP}}}b{{{/NONGULP}}}\n"


def test_strip_uses_two_literal_passes(vip_file: FileSet, monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    monkeypatch.setattr(blocks, "apply_replacement", lambda rule, file_set: calls.append(rule))

    resolve_tag("VIP", False, vip_file)

    assert [rule.pattern for rule in calls] == ["{{{VIP}}}", "{{{/VIP}}}"]
    assert all(rule.replacement == "" for rule in calls)


def test_delete_uses_one_pattern_pass(vip_file: FileSet, monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []
    monkeypatch.setattr(blocks, "apply_replacement", lambda rule, file_set: calls.append(rule))

    resolve_tag("VIP", True, vip_file)

    assert len(calls) == 1
    assert isinstance(calls[0].pattern, re.Pattern)
    assert calls[0].replacement == ""
