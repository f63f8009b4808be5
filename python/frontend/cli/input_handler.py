"""Single-keypress reader for the terminal frontend.

Handles arrow keys, WASD, and command letters without requiring Enter.
Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys


def _getch_unix() -> str:
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
    return ch


def _getch_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    ch = msvcrt.getch()
    # Arrow keys arrive as a 0xE0 / 0x00 prefix followed by a scan code.
    if ch in (b"\xe0", b"\x00"):
        return _WINDOWS_ARROWS.get(msvcrt.getch(), "")
    return ch.decode("utf-8", errors="ignore")


_WINDOWS_ARROWS: dict[bytes, str] = {
    b"H": "\x1b[A",
    b"P": "\x1b[B",
    b"M": "\x1b[C",
    b"K": "\x1b[D",
}

_getch = _getch_windows if os.name == "nt" else _getch_unix


# -- key mapping ---------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "r": "scramble",
    "x": "reset",
    "t": "target",
    "u": "undo",
    "v": "solve",
    "n": "hint",
    "p": "play",
    "\r": "enter",
    "\n": "enter",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    if ch in _KEY_MAP:
        return _KEY_MAP[ch]
    if ch.lower() in _KEY_MAP and ch.isalpha():
        return _KEY_MAP[ch.lower()]
    return ch if ch.isprintable() else ""


def resolve_sequence(chars: str) -> str:
    """Map a raw key sequence (possibly an ANSI arrow escape) to an action."""
    if chars.startswith("\x1b"):
        if chars[1:2] == "[":
            return _ARROW_MAP.get(chars[2:3], "")
        return "quit"  # bare Escape
    return resolve(chars[:1]) if chars else ""


def get_key() -> str:
    """Read a single keypress and return a normalised action string.

    Blocks until a key is pressed.

    Possible return values:
        "up", "down", "left", "right"  — movement
        "quit"                         — q / Ctrl-C / Escape
        "scramble"                     — r
        "reset"                        — x (back to the solved layout)
        "target"                       — t (use current board as target)
        "undo"                         — u
        "solve"                        — v
        "hint"                         — n
        "play"                         — p (replay a solution)
        "enter"                        — Enter / Return
        "<char>"                       — unmapped printable char
        ""                             — unrecognised key
    """
    ch = _getch()
    if ch == "\x1b":
        ch2 = _getch()
        if ch2 == "[":
            return resolve_sequence(ch + ch2 + _getch())
        return "quit"
    return resolve_sequence(ch)
