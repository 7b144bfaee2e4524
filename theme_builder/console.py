"""
console.py

Responsibility: Operator-facing output.

All notices are printed through a single Rich console. Colour is a
presentation concern: print sites wrap text with `styled()` explicitly.
"""

from __future__ import annotations

from enum import Enum

from rich.console import Console
from rich.markup import escape

console = Console(soft_wrap=True, highlight=False, emoji=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)


class Style(str, Enum):
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"


def styled(text: str, style: Style) -> str:
    """
    Return `text` as escaped Rich markup in the given style.
    """
    return f"[{style.value}]{escape(text)}[/{style.value}]"


def plain(text: str) -> str:
    return escape(text)


BANNER = r"""

  ____    _    _   _____   _        _____    ______   _____
 |  _ \  | |  | | |_   _| | |      |  __ \  |  ____| |  __ \
 | |_) | | |  | |   | |   | |      | |  | | | |__    | |__) |
 |  _ <  | |  | |   | |   | |      | |  | | |  __|   |  _  /
 | |_) | | |__| |  _| |_  | |____  | |__| | | |____  | | \ \
 |____/   \____/  |_____| |______| |_____/  |______| |_|  \_\

                                 ___________________________
                                |                           |
                                |  DYNAMIC THEME GENERATOR  |
                                |___________________________|

"""

EXPLOSION = r"""


                _.-^^---....,,--
            _--                  --_
           <                        >)
           |                         |
            \._                   _./
               ```--. . , ; .--'''
                     | |   |
                  .-=||  | |=-.
                  `-=#$%&%$#=-'
                     | ;  :|
            _____.,-#%&$@%#&#~,._____
"""
