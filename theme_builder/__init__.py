"""
theme_builder package

This package implements an interactive builder that customises a theme
template in place from the operator's answers.

Key responsibilities are split across modules:
- `config.py`: defaults and `builder.yaml` overrides
- `matcher.py`: `{{{TAG}}}` marker literals and block patterns
- `substitution.py`: find/replace across the eligible file set
- `blocks.py`: keep or delete conditional tag blocks
- `pruner.py`: delete optional files and directories
- `instances.py`: clone the prototype file once per named instance
- `answers.py`: answer validation and the ask-until-valid loop
- `flow.py`: the ordered question pipeline and restart/finalize states
- `workspace.py`: reset the tree through version control
- `cli.py`: CLI entrypoint, interrupt handling
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
