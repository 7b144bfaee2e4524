"""
workspace.py

Responsibility: Restore the project tree to its last committed state.

The builder edits the template in place, so starting over (or aborting) means
discarding local modifications and untracked files through version control.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

logger = logging.getLogger(__name__)


class WorkspaceError(RuntimeError):
    def __init__(self, message: str, *, command: Sequence[str] = (), output: str = "") -> None:
        super().__init__(message)
        self.command = tuple(command)
        self.output = output


def _run(cmd: Sequence[str], *, cwd: Path) -> str:
    """
    Run a subprocess command, raising a WorkspaceError on failure.
    """
    try:
        result = subprocess.run(
            list(cmd), cwd=str(cwd), check=True, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True
        )
    except FileNotFoundError as e:
        raise WorkspaceError(f"Command not found: {cmd[0]}", command=cmd) from e
    except subprocess.CalledProcessError as e:
        raise WorkspaceError(f"Command failed: {' '.join(cmd)}\n\n{e.stdout}", command=cmd, output=e.stdout) from e
    return result.stdout


def reset_workspace(root: str | Path, commands: Sequence[Sequence[str]]) -> list[str]:
    """
    Run each reset command in `root`, in order. Returns their outputs.
    """
    outputs: list[str] = []
    for cmd in commands:
        logger.debug("running %s in %s", " ".join(cmd), root)
        outputs.append(_run(cmd, cwd=Path(root)))
    return outputs
