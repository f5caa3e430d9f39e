"""alphabet.py

Symbol tables for the geosquare grid.

Every cell of the grid is split into either a 5x5 or a 2x2 block of children.
A child's position inside its parent is written as one symbol taken from
:data:`CODE_ALPHABET`, indexed ``[row][col]`` with row 0 at the southern edge
and col 0 at the western edge.  The 2x2 case reuses the top-left corner of the
same matrix, so the symbols ``2 3 7 8`` mean the same position in both.

The symbols avoid vowels and look-alike characters, which keeps GIDs readable
and safe for filenames and URL segments.
"""

from __future__ import annotations

from typing import Dict, Tuple

# ------------------------------------------------------------
# Symbol matrix
# ------------------------------------------------------------

CODE_ALPHABET: Tuple[Tuple[str, ...], ...] = (
    ("2", "3", "4", "5", "6"),
    ("7", "8", "9", "C", "E"),
    ("F", "G", "H", "J", "L"),
    ("M", "N", "P", "Q", "R"),
    ("T", "V", "W", "X", "Y"),
)

# 25 symbols, row-major
ALPHABET_25: Tuple[str, ...] = tuple(c for row in CODE_ALPHABET for c in row)

# 4 symbols, first two columns of the first two rows
ALPHABET_4: Tuple[str, ...] = CODE_ALPHABET[0][:2] + CODE_ALPHABET[1][:2]

# symbol -> (row, col)
SYMBOL_POSITION: Dict[str, Tuple[int, int]] = {
    c: (row_idx, col_idx)
    for row_idx, row in enumerate(CODE_ALPHABET)
    for col_idx, c in enumerate(row)
}

_ALPHABETS: Dict[int, Tuple[str, ...]] = {5: ALPHABET_25, 2: ALPHABET_4}


def alphabet_for(dimension: int) -> Tuple[str, ...]:
    """Return the symbols used to address children of a *dimension* x *dimension* split.

    Args:
        dimension: Either 5 or 2.

    Returns:
        The 25-symbol alphabet for 5, the 4-symbol alphabet for 2.

    Raises:
        KeyError: For any other dimension.
    """
    return _ALPHABETS[dimension]


def symbol_at(row: int, col: int) -> str:
    """Symbol for matrix position ``(row, col)``."""
    return CODE_ALPHABET[row][col]


def next_symbol(symbol: str) -> str | None:
    """Return the symbol following *symbol* in :data:`ALPHABET_25`, or None for the last one."""
    idx = ALPHABET_25.index(symbol)
    if idx + 1 >= len(ALPHABET_25):
        return None
    return ALPHABET_25[idx + 1]
