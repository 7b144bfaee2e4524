"""
instances.py

Responsibility: Clone a prototype file once per operator-supplied name.

High-level flow:
1) Ask how many instances are needed (lenient parse, 0 means do nothing)
2) For each instance ask for a unique identifier and copy the prototype
3) Substitute the identifier into the copy
4) Delete the prototype and replace the include marker with one include
   directive per generated file, in creation order
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, StrictUndefined, TemplateError

from theme_builder.answers import IDENTIFIER_HINT, Prompter, Question, parse_count, parse_identifier
from theme_builder.config import ConfigError, InstanceTemplate
from theme_builder.console import Style, console, plain, styled
from theme_builder.substitution import FileSet, FilesystemError, ReplacementRule, apply_replacement

logger = logging.getLogger(__name__)

_env = Environment(autoescape=False, undefined=StrictUndefined, keep_trailing_newline=True)


@dataclass(frozen=True)
class PostTypeSpec:
    """One generated instance: its identifier and its path relative to the root."""

    name: str
    path: str


def _render(source: str, **context: str) -> str:
    try:
        return _env.from_string(source).render(**context)
    except TemplateError as e:
        raise ConfigError(f"Failed rendering {source!r}: {e}") from e


def instance_path(name: str, template: InstanceTemplate) -> str:
    """Relative path of the file generated for `name`, beside the prototype."""
    filename = _render(template.filename, name=name.replace(" ", "-"))
    parent = Path(template.prototype).parent
    return (parent / filename).as_posix()


def build_include_block(paths: list[str], directive: str) -> str:
    """One rendered include directive per path, newline-joined."""
    return "\n".join(_render(directive, path=path) for path in paths)


def _ask_unique_name(prompter: Prompter, index: int, template: InstanceTemplate, taken: set[str]) -> tuple[str, str]:
    question = Question(f"What should the post type {index} be named?", hint=IDENTIFIER_HINT)
    while True:
        name = prompter.ask(question, parse_identifier)
        path = instance_path(name, template)
        if path not in taken:
            return name, path
        console.print(styled("\nPost type name already used", Style.RED))


def _copy(src: Path, dst: Path) -> None:
    try:
        shutil.copyfile(src, dst)
    except OSError as e:
        raise FilesystemError(f"Failed copying {src.name} to {dst.name}: {e}") from e


def create_instances(
    prompter: Prompter,
    count: int,
    file_set: FileSet,
    template: InstanceTemplate,
) -> list[PostTypeSpec]:
    """
    Create `count` copies of the prototype and wire them into the include
    marker. Does nothing when `count` is not positive.
    """
    if count <= 0:
        return []

    prototype = file_set.root / template.prototype
    created: list[PostTypeSpec] = []

    for index in range(1, count + 1):
        name, rel = _ask_unique_name(prompter, index, template, {spec.path for spec in created})
        _copy(prototype, file_set.root / rel)
        created.append(PostTypeSpec(name=name, path=rel))

        apply_replacement(ReplacementRule(template.name_token, name), file_set, skip=template.prototype)
        apply_replacement(
            ReplacementRule(template.name_capitalized_token, name.capitalize()),
            file_set,
            skip=template.prototype,
        )
        console.print(plain(f"\nCreated {rel}"))

    try:
        prototype.unlink()
    except OSError as e:
        raise FilesystemError(f"Failed deleting {template.prototype}: {e}") from e

    block = build_include_block([spec.path for spec in created], template.include_directive)
    logger.debug("include block for %d instance(s):\n%s", len(created), block)
    apply_replacement(ReplacementRule(template.include_marker, block), file_set)
    return created


def generate_instances(prompter: Prompter, file_set: FileSet, template: InstanceTemplate) -> list[PostTypeSpec]:
    """
    Ask for the number of instances, then create them.
    """
    console.print(plain("\nHow many custom post types do you need?"))
    count = parse_count(prompter.read())
    return create_instances(prompter, count, file_set, template)
