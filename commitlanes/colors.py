# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of CommitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

# Color scheme based on Tailwind's 500 shades

from collections.abc import Sequence

amber   = "#f59e0b"
blue    = "#3b82f6"
green   = "#22c55e"
purple  = "#a855f7"
pink    = "#ec4899"
cyan    = "#06b6d4"
orange  = "#f97316"
indigo  = "#6366f1"
gray    = "#9ca3af"

PALETTE = [
    amber, blue, green, purple, pink, cyan, orange, indigo
]

MAIN_COLOR = amber
"Reserved for main/master, wherever it sits in the graph."

ORPHAN_COLOR = gray
"Reserved for commits without parents or refs in the visible window."


def _utf16CodeUnits(text: str):
    for char in text:
        codePoint = ord(char)
        if codePoint > 0xFFFF:
            codePoint -= 0x10000
            yield 0xD800 + (codePoint >> 10)
            yield 0xDC00 + (codePoint & 0x3FF)
        else:
            yield codePoint


def _int32(n: int) -> int:
    """ Wrap to a signed 32-bit integer, like a JavaScript bitwise operand. """
    n &= 0xFFFFFFFF
    return n - (1 << 32) if n & 0x80000000 else n


def branchNameHash(name: str) -> int:
    """
    Rolling hash over the UTF-16 code units of the name, with JavaScript number
    semantics: `h = ((h << 5) - h) + unit`.

    Only the shift wraps to 32 bits; the subtraction and the addition don't,
    so the result may fall outside the int32 range.

    Must stay byte-for-byte stable: it decides which color a branch gets in
    every render, whatever the other branches are.
    """
    h = 0
    for unit in _utf16CodeUnits(name):
        h = _int32(_int32(h) << 5) - h + unit
    return h


def hashBranchColor(name: str, palette: Sequence[str] = PALETTE) -> str:
    return palette[abs(branchNameHash(name)) % len(palette)]


def laneColor(lane: int, palette: Sequence[str] = PALETTE) -> str:
    return palette[lane % len(palette)]
