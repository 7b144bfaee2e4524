"""
substitution.py

Responsibility: Find/replace across the eligible files of the project tree.

Rules:
- The file set is recomputed on every call so it always reflects the tree on
  disk, including files removed or created by earlier answers.
- Only files with an allow-listed extension are touched; any path containing
  an excluded substring (dependency caches) or a hidden component is skipped.
- Every eligible file is rewritten, even when nothing matched.

This module intentionally does NOT know about questions, tags, or git.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from theme_builder.config import BuilderConfig
from theme_builder.console import console, plain

logger = logging.getLogger(__name__)


class FilesystemError(RuntimeError):
    pass


@dataclass(frozen=True)
class ReplacementRule:
    """
    A literal substring or compiled pattern, and the text that replaces it.

    An empty replacement deletes every match.
    """

    pattern: str | re.Pattern[str]
    replacement: str

    def apply(self, text: str) -> str:
        if isinstance(self.pattern, re.Pattern):
            # A callable replacement keeps backslashes in operator text literal.
            return self.pattern.sub(lambda _m: self.replacement, text)
        return text.replace(self.pattern, self.replacement)


@dataclass(frozen=True)
class FileSet:
    """The project root plus the filters that decide which files are scanned."""

    root: Path
    extensions: tuple[str, ...]
    excluded: tuple[str, ...]

    @classmethod
    def from_config(cls, root: str | Path, config: BuilderConfig) -> FileSet:
        return cls(root=Path(root), extensions=config.extensions, excluded=config.excluded)

    def relative(self, path: str | Path) -> str:
        """Forward-slash path of `path` relative to the root."""
        p = Path(path)
        if p.is_absolute():
            p = p.relative_to(self.root)
        return p.as_posix()

    def _eligible(self, rel: str) -> bool:
        parts = rel.split("/")
        if any(part.startswith(".") for part in parts):
            return False
        lowered = rel.lower()
        if any(ex.lower() in lowered for ex in self.excluded):
            return False
        _, ext = os.path.splitext(parts[-1])
        return ext[1:].lower() in self.extensions

    def files(self, skip: str | Path | None = None) -> list[Path]:
        """
        Return every eligible file under the root, in sorted relative-path
        order, leaving out `skip` when given.
        """
        skip_rel = self.relative(skip) if skip is not None else None
        found: list[tuple[str, Path]] = []
        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames[:] = [d for d in dirnames if not d.startswith(".")]
            for name in filenames:
                path = Path(dirpath) / name
                rel = path.relative_to(self.root).as_posix()
                if rel == skip_rel or not self._eligible(rel):
                    continue
                found.append((rel, path))
        found.sort(key=lambda item: item[0])
        return [path for _rel, path in found]


def apply_replacement(rule: ReplacementRule, file_set: FileSet, skip: str | Path | None = None) -> list[Path]:
    """
    Apply `rule` to every file in `file_set` (except `skip`) and write each
    file back. Returns the files rewritten.

    A trailing newline is added when the new text lacks one.
    """
    touched: list[Path] = []
    for path in file_set.files(skip=skip):
        rel = file_set.relative(path)
        try:
            text = path.read_text(encoding="utf-8")
            out = rule.apply(text)
            if not out.endswith("\n"):
                out += "\n"
            path.write_text(out, encoding="utf-8", newline="\n")
        except (OSError, UnicodeDecodeError) as e:
            raise FilesystemError(f"Failed updating {rel}: {e}") from e

        logger.debug("rewrote %s (changed=%s)", rel, out != text)
        console.print(plain(f"Updating {rel}"))
        touched.append(path)
    return touched
