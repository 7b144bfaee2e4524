"""
blocks.py

Responsibility: Keep or remove conditional `{{{TAG}}} ... {{{/TAG}}}` regions.

Under normal polarity a tag wraps content that a "yes" answer removes; an
inverse tag wraps content that a "yes" answer keeps:

    inverse  decision  effect
    False    yes       delete markers and body
    False    no        strip markers, keep body
    True     yes       strip markers, keep body
    True     no        delete markers and body
"""

from __future__ import annotations

from theme_builder.matcher import between_pattern, tag_markers
from theme_builder.substitution import FileSet, ReplacementRule, apply_replacement


def keeps_body(decision: bool, inverse: bool = False) -> bool:
    return decision if inverse else not decision


def strip_markers(tag: str, file_set: FileSet) -> None:
    for marker in tag_markers(tag):
        apply_replacement(ReplacementRule(pattern=marker, replacement=""), file_set)


def delete_block(tag: str, file_set: FileSet) -> None:
    apply_replacement(ReplacementRule(pattern=between_pattern(tag), replacement=""), file_set)


def resolve_tag(tag: str, decision: bool, file_set: FileSet, inverse: bool = False) -> None:
    """
    Resolve every block of `tag` across the file set for a validated yes/no
    `decision`.
    """
    if keeps_body(decision, inverse):
        strip_markers(tag, file_set)
    else:
        delete_block(tag, file_set)
