import math

import pytest


def same_value(actual: float, expected: float) -> bool:
    """Equality that treats nan == nan and tolerates float rounding."""
    if math.isnan(expected):
        return math.isnan(actual)
    if math.isinf(expected):
        return actual == expected
    return actual == pytest.approx(expected)
