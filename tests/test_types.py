import math

import pytest

from linearlab.config import MAX_ENTRY
from linearlab.model.types import Vector, is_entry, is_valid_matrix


class TestIsEntry:
    @pytest.mark.parametrize("value", [0, 1, -2.5, MAX_ENTRY, -MAX_ENTRY])
    def test_accepts(self, value):
        assert is_entry(value)

    @pytest.mark.parametrize("value", [
        True, "1", None, math.nan, math.inf, -math.inf, MAX_ENTRY * 1.5, 10 ** 400,
    ])
    def test_rejects(self, value):
        assert not is_entry(value)


def test_matrix_with_huge_int_is_invalid():
    assert not is_valid_matrix([[10 ** 400, 0], [0, 1]], 2)


def test_vector_component_out_of_range():
    v = Vector(x=1.0, y=2.0, label="u", color="red")
    with pytest.raises(ValueError):
        v.with_component("x", 10 ** 400)
    assert v.with_component("y", -MAX_ENTRY).y == -MAX_ENTRY
