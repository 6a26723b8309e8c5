"""Explicit "nothing here" markers.

Hours and period bounds use these instead of ``None`` so an absent value is
never confused with zero or with a forgotten argument.
"""

from __future__ import annotations

from enum import Enum


class NoValue(Enum):
    NO_VALUE = "no_value"

    def __repr__(self) -> str:
        return "NO_VALUE"


class NoRestriction(Enum):
    NO_RESTRICTION = "no_restriction"

    def __repr__(self) -> str:
        return "NO_RESTRICTION"


NO_VALUE = NoValue.NO_VALUE
NO_RESTRICTION = NoRestriction.NO_RESTRICTION
