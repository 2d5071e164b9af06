"""Sample validation and numeric coercion.

Every public entry point funnels its input through ``validate_sample`` before
any statistics are computed. Numeric strings are accepted (``"42"``,
``" 3.5 "``); anything that cannot be read as a finite float is dropped.
"""

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np
import pandas as pd

from zonewatch.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


def _coerce(value: Any) -> float:
    """Convert a single element to float, NaN when it is not numeric."""
    # bool is an int subclass; True/False are not measurements
    if isinstance(value, (bool, np.bool_)):
        return math.nan
    if isinstance(value, (int, float, np.integer, np.floating)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return math.nan
    return math.nan


def validate_sample(data: Any) -> np.ndarray:
    """Validate and coerce raw input into a finite float sample.

    Accepts a list, tuple, numpy array or pandas Series, or a mapping with a
    ``"data"`` key holding one of those.

    Args:
        data: Raw input values

    Returns:
        1-D float64 array holding only the finite values, original order kept

    Raises:
        InvalidInputError: If the input is not a sequence, is empty, or
            contains no finite numeric value

    Example:
        >>> validate_sample(["1", 2, 3.5])
        array([1. , 2. , 3.5])
    """
    if isinstance(data, Mapping) and "data" in data:
        data = data["data"]

    if isinstance(data, pd.Series):
        raw = data.tolist()
    elif isinstance(data, np.ndarray):
        if data.ndim != 1:
            raise InvalidInputError(
                f"Please pass a one-dimensional sequence of numbers, got {data.ndim}-D array."
            )
        raw = data.tolist()
    elif isinstance(data, Sequence) and not isinstance(data, (str, bytes, bytearray)):
        raw = list(data)
    else:
        raise InvalidInputError("Please pass a sequence of numbers.")

    if not raw:
        raise InvalidInputError("Sample is empty. Please pass at least one number.")

    values = np.array([_coerce(v) for v in raw], dtype=float)
    finite = np.isfinite(values)

    if not finite.any():
        raise InvalidInputError(
            "Data included something other than numbers or number strings. "
            "Please pass a sequence of numbers."
        )

    dropped = int((~finite).sum())
    if dropped:
        logger.warning(
            "Dropped %d non-numeric or non-finite value(s) out of %d", dropped, len(raw)
        )

    return values[finite]
