"""
cli.py

Responsibility: CLI entrypoint for the theme builder.

High-level flow (no subcommands, no behavioural flags):
1) Load `builder.yaml` (or defaults) -> `BuilderConfig`
2) Print the banner and run the question flow in the current directory
3) On interrupt, reset the workspace and exit

This module should orchestrate behavior but keep concerns isolated:
- Configuration: `config.py`
- Questions and dispatch: `flow.py`
- Workspace reset: `workspace.py`
"""

from __future__ import annotations

import argparse
import logging
import os
from functools import partial
from pathlib import Path

from rich.logging import RichHandler

from theme_builder import __version__
from theme_builder.answers import InputSource, Prompter
from theme_builder.config import ConfigError, load_config
from theme_builder.console import BANNER, Style, console, err_console, plain, styled
from theme_builder.flow import AnswerFlow, FlowContext
from theme_builder.substitution import FilesystemError
from theme_builder.workspace import WorkspaceError, reset_workspace

EXIT_INTERRUPTED = 130
EXIT_RESET_FAILED = 3

RESET_NOTICE = "Theme generation exited and theme has been reset to its original state."
RESET_FAILED_NOTICE = "Theme generation exited but the theme could NOT be reset; restore it manually."


def _configure_logging() -> None:
    if not os.environ.get("THEME_BUILDER_DEBUG"):
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="theme-builder",
        description="Customise the theme template in the current directory by answering questions.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def _abort(root: Path, commands: tuple[tuple[str, ...], ...]) -> int:
    console.print("\n\n")
    try:
        outputs = reset_workspace(root, commands)
    except WorkspaceError as e:
        err_console.print(styled(f"\n\n{e}", Style.RED))
        err_console.print(styled(f"\n\n{RESET_FAILED_NOTICE}", Style.RED))
        return EXIT_RESET_FAILED

    for output in outputs:
        if output:
            console.print(plain(output))
    err_console.print(styled(f"\n\n{RESET_NOTICE}", Style.RED))
    return EXIT_INTERRUPTED


def main(argv: list[str] | None = None, *, root: str | Path | None = None, read: InputSource = input) -> int:
    _build_parser().parse_args(argv)
    _configure_logging()

    root_path = Path(root or Path.cwd()).resolve()
    try:
        config = load_config(root_path)
    except ConfigError as e:
        err_console.print(styled(str(e), Style.RED))
        return 2

    console.print(plain(BANNER))
    ctx = FlowContext(root=root_path, config=config, prompter=Prompter(read))
    flow = AnswerFlow(ctx, reset=partial(reset_workspace, root_path, config.reset_commands))

    try:
        flow.run()
    except (KeyboardInterrupt, EOFError):
        return _abort(root_path, config.reset_commands)
    except (FilesystemError, WorkspaceError, ConfigError) as e:
        err_console.print(styled(f"\n{e}", Style.RED))
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
