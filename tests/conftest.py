"""Shared pytest fixtures for the theme builder test suite.

Provides reusable fixtures for:
- A sample theme template tree in a temporary directory
- A scripted input source standing in for `input()`
- A flow context wired to the sample tree
"""

from __future__ import annotations

import shutil
import textwrap
from pathlib import Path
from typing import Callable

import pytest

from theme_builder.answers import Prompter
from theme_builder.config import BuilderConfig
from theme_builder.flow import FlowContext
from theme_builder.substitution import FileSet

SAMPLE_THEME: dict[str, str] = {
    "functions.php": textwrap.dedent(
        """\
        <?php
        /* {%= title %} ({%= title_capitalize %}) by {%= author %} */
        {{{VIP}}}
        require 'vip.php';
        {{{/VIP}}}
        {{{LANG}}}
        load_theme_textdomain( '{%= prefix %}' );
        {{{/LANG}}}
        {{{CUSTOM-POSTS}}}
        {%= post_type_include %}
        {{{/CUSTOM-POSTS}}}
        class {%= prefix_capitalize %}_Theme {}
        """
    ),
    "style.css": textwrap.dedent(
        """\
        /*
        Theme Name: {%= title %}
        Theme URI: {%= theme_uri %}
        Author URI: {%= author_uri %}
        Description: {%= description %}
        */
        """
    ),
    "extensions/custom-post-types/custom-post-type.php": textwrap.dedent(
        """\
        <?php
        class {%= post_type_name_capitalize %}_Post_Type {
            public $name = '{%= post_type_name %}';
        }
        """
    ),
    "gulpfile.js": textwrap.dedent(
        """\
        {{{GULPCOMPASS}}}
        var compass = require('gulp-compass');
        {{{/GULPCOMPASS}}}
        {{{GULPNONCOMPASS}}}
        var sass = require('gulp-sass');
        {{{/GULPNONCOMPASS}}}
        """
    ),
    "header.php": textwrap.dedent(
        """\
        {{{GULP}}}
        <link rel="stylesheet" href="css/styles.min.css">
        {{{/GULP}}}
        {{{NONGULP}}}
        <link rel="stylesheet" href="css/styles.css">
        {{{/NONGULP}}}
        """
    ),
    "package.json": '{ "name": "{%= prefix %}" }\n',
    "languages/theme.pot": "msgid \"\"\n",
    "sass/style.scss": "{{{COMPASS}}}\n@import 'compass';\n{{{/COMPASS}}}\nbody { margin: 0; }\n",
    "css/styles.css": "body { margin: 0; }\n",
    "config.rb": "css_dir = 'css'\n",
    "README.md": "# Sample Theme\nRun the builder to customise this theme.\n",
    "notes.md": "{%= title %}\n",
    "node_modules/pkg/index.js": "module.exports = '{%= title %}';\n",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def restore_tree(snapshot: Path, root: Path) -> None:
    """Replace `root` with a copy of `snapshot`."""
    shutil.rmtree(root)
    shutil.copytree(snapshot, root)


class ScriptedInput:
    """Stands in for `input()`, returning queued answers in order."""

    def __init__(self, answers: list[str], exhausted: type[BaseException] = EOFError) -> None:
        self.answers = list(answers)
        self.exhausted = exhausted
        self.calls = 0

    def __call__(self, prompt: str = "") -> str:
        self.calls += 1
        if not self.answers:
            raise self.exhausted()
        return self.answers.pop(0)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def theme_dir(tmp_path: Path) -> Path:
    """Sample theme template tree."""
    return write_tree(tmp_path / "theme", SAMPLE_THEME)


@pytest.fixture
def snapshot(tmp_path: Path, theme_dir: Path) -> Path:
    """Pristine copy of the sample theme, for resetting it between passes."""
    copy = tmp_path / "snapshot"
    shutil.copytree(theme_dir, copy)
    return copy


@pytest.fixture
def config() -> BuilderConfig:
    return BuilderConfig()


@pytest.fixture
def file_set(theme_dir: Path, config: BuilderConfig) -> FileSet:
    return FileSet.from_config(theme_dir, config)


@pytest.fixture
def scripted() -> type[ScriptedInput]:
    return ScriptedInput


@pytest.fixture
def make_context(theme_dir: Path, config: BuilderConfig) -> Callable[[list[str]], tuple[FlowContext, ScriptedInput]]:
    """Factory building a flow context whose prompter reads the given answers."""

    def _make(answers: list[str]) -> tuple[FlowContext, ScriptedInput]:
        source = ScriptedInput(answers)
        return FlowContext(root=theme_dir, config=config, prompter=Prompter(source)), source

    return _make
