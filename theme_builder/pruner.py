"""
pruner.py

Responsibility: Delete optional files and directories of the template.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from theme_builder.console import Style, console, styled
from theme_builder.substitution import FilesystemError


def _delete(target: Path, label: str) -> None:
    try:
        if target.is_dir():
            shutil.rmtree(target)
        else:
            target.unlink()
    except OSError as e:
        raise FilesystemError(f"Failed deleting {label}: {e}") from e


def prune_or_keep(path: str | Path, decision: bool, root: str | Path) -> None:
    """
    Delete `path` (relative to `root`) on a negative decision, recursively if
    it is a directory. A missing path raises `FilesystemError`.
    """
    label = Path(path).as_posix()
    if decision:
        console.print(styled(f"\n{label} kept", Style.CYAN))
        return

    _delete(Path(root) / path, label)
    console.print(styled(f"\n{label} deleted", Style.RED))


def remove_tree(path: str | Path, root: str | Path) -> bool:
    """
    Remove `path` if it exists. Returns whether anything was removed.
    """
    target = Path(root) / path
    if not target.exists():
        return False
    _delete(target, Path(path).as_posix())
    return True
