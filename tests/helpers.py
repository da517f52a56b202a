"""Small helpers shared by test modules."""

import pytest


def assert_vec_close(actual, expected, abs_tol=1e-9):
    """Compare two vectors component-wise."""
    for a, e in zip(actual, expected):
        assert a == pytest.approx(e, abs=abs_tol), f"{actual!r} != {expected!r}"
