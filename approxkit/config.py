"""
Library defaults read from the environment.

Values are resolved once, at import time:

    APPROXKIT_COMPARISON_MODE   "literal" (default) or "corrected"; selects how
                                ToleranceValue implements ``>=``.
    APPROXKIT_PARTITIONS        default partition count used by
                                parallel_kbn_sum (positive integer, default 4).

Unrecognised environment values are reported with a warning and the built-in
default is used instead.
"""

import enum
import logging
import os
from typing import Union

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

COMPARISON_MODE_ENV = "APPROXKIT_COMPARISON_MODE"
PARTITIONS_ENV = "APPROXKIT_PARTITIONS"


class ComparisonMode(enum.Enum):
    """
    Semantics of ``>=`` for tolerance values.

    LITERAL keeps the historical definition ``a == b and b.value > a.value``.
    CORRECTED uses ``a == b or a > b``, the mirror image of ``<=``.
    """

    LITERAL = "literal"
    CORRECTED = "corrected"


def resolve_comparison_mode(mode: Union[str, ComparisonMode]) -> ComparisonMode:
    """
    Convert a mode name to a :class:`ComparisonMode`.

    Args:
        mode: Enum member or case-insensitive name ("literal" / "corrected")

    Returns:
        The matching ComparisonMode

    Raises:
        ConfigurationError: If the name is unknown
    """
    if isinstance(mode, ComparisonMode):
        return mode
    try:
        return ComparisonMode(str(mode).strip().lower())
    except ValueError:
        raise ConfigurationError(
            f"Unknown comparison mode {mode!r}; expected one of "
            f"{[m.value for m in ComparisonMode]}"
        ) from None


def _comparison_mode_from_env() -> ComparisonMode:
    raw = os.environ.get(COMPARISON_MODE_ENV, "")
    if not raw:
        return ComparisonMode.LITERAL
    try:
        return resolve_comparison_mode(raw)
    except ConfigurationError:
        logger.warning(
            "Ignoring %s=%r, falling back to %s",
            COMPARISON_MODE_ENV, raw, ComparisonMode.LITERAL.value,
        )
        return ComparisonMode.LITERAL


def _partitions_from_env() -> int:
    raw = os.environ.get(PARTITIONS_ENV, "")
    if not raw:
        return 4
    if raw.isdigit() and int(raw) > 0:
        return int(raw)
    logger.warning("Ignoring %s=%r, falling back to 4", PARTITIONS_ENV, raw)
    return 4


DEFAULT_COMPARISON_MODE = _comparison_mode_from_env()
DEFAULT_PARTITIONS = _partitions_from_env()
