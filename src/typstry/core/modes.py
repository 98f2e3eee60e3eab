# topmark:header:start
#
#   project      : Typstry
#   file         : modes.py
#   file_relpath : src/typstry/core/modes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typst lexical modes.

Typst source text is always read in exactly one of three modes:

- ``CODE``: expressions, entered from the other modes with the number sign ``#``.
- ``MARKUP``: top-level prose, also the content of square brackets ``[...]``.
- ``MATH``: formulas, enclosed in dollar signs ``$...$``.

Example:
    ```python
    from typstry.core.modes import Mode

    assert Mode.parse("Math") is Mode.MATH
    assert Mode.MARKUP.sigil == ""
    ```
"""

from __future__ import annotations

from enum import Enum

from typstry.constants import CODE_SIGIL, MATH_SIGIL


def _norm_token(s: str) -> str:
    """Normalize an identifier-like string to match mode names."""
    return s.strip().lower().replace("-", "_").replace(" ", "_")


class Mode(Enum):
    """The Typst context a formatted value is emitted into.

    Attributes:
        CODE: Code mode, following the number sign ``#``.
        MARKUP: Markup mode, at the top level and inside square brackets.
        MATH: Math mode, inside dollar signs ``$``.
    """

    CODE = 0
    MARKUP = 1
    MATH = 2

    @property
    def sigil(self) -> str:
        """The sigil that enters this mode from markup (empty for markup itself)."""
        if self is Mode.CODE:
            return CODE_SIGIL
        if self is Mode.MATH:
            return MATH_SIGIL
        return ""

    @classmethod
    def parse(cls, raw: str | None) -> Mode | None:
        """Parse a token into a mode.

        Matching is case-insensitive and accepts the member name or its numeric value.

        Args:
            raw (str | None): The token to parse, e.g. ``"math"`` or ``"2"``.

        Returns:
            Mode | None: The matching mode, or ``None`` if ``raw`` is ``None`` or unknown.
        """
        if raw is None:
            return None
        token: str = _norm_token(raw)
        for m in cls:
            if token in (_norm_token(m.name), str(m.value)):
                return m
        return None

    def __str__(self) -> str:
        return self.name.lower()
