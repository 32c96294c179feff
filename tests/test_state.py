"""Tests for the Store: edits, presets, mode switching, sharing and the insight flags."""
import base64
import json
import math

import pytest

from linearlab.app.state import Store
from linearlab.config import MAX_ENTRY
from linearlab.model.presets import INITIAL_MATRIX_2D, INITIAL_VECTORS_2D, INITIAL_VECTORS_3D
from linearlab.model.types import DimensionMode, Insight


@pytest.fixture
def store(qapp):
    return Store()


def _b64(obj) -> str:
    return base64.b64encode(json.dumps(obj).encode("utf-8")).decode("ascii")


def record(signal):
    received = []
    signal.connect(lambda *args: received.append(args))
    return received


class TestInitialState:
    def test_defaults(self, store):
        assert store.mode is DimensionMode.TWO_D
        assert store.active_matrix() == INITIAL_MATRIX_2D
        assert store.active_vectors() == INITIAL_VECTORS_2D
        assert store.show_grid is True
        assert store.insight is None
        assert store.loading is False


class TestMatrixEdits:
    def test_entry_update_publishes_new_value(self, store):
        before = store.active_matrix()
        emitted = record(store.matrix_changed)

        store.set_matrix_entry(0, 1, 3.0)

        assert before == INITIAL_MATRIX_2D
        assert store.active_matrix() == ((1.0, 3.0), (0.0, 1.0))
        assert emitted == [(((1.0, 3.0), (0.0, 1.0)),)]

    def test_non_finite_entry_rejected(self, store):
        with pytest.raises(ValueError):
            store.set_matrix_entry(0, 0, math.nan)
        assert store.active_matrix() == INITIAL_MATRIX_2D

    def test_entry_out_of_range(self, store):
        with pytest.raises(IndexError):
            store.set_matrix_entry(2, 0, 1.0)

    def test_wrong_shape_rejected(self, store):
        with pytest.raises(ValueError):
            store.set_matrix(((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)))

    def test_transpose(self, store):
        store.set_matrix(((1.0, 2.0), (3.0, 4.0)))
        store.transpose()
        assert store.active_matrix() == ((1.0, 3.0), (2.0, 4.0))

    def test_multiply(self, store):
        store.set_matrix(((1.0, 2.0), (3.0, 4.0)))
        store.set_matrix_b(((0.0, 1.0), (1.0, 0.0)))
        assert store.multiply() is True
        assert store.active_matrix() == ((2.0, 1.0), (4.0, 3.0))

    def test_multiply_unavailable_in_3d(self, store):
        store.set_mode(DimensionMode.THREE_D)
        before = store.active_matrix()
        assert store.multiply() is False
        assert store.active_matrix() == before

    def test_preset(self, store):
        store.apply_preset("Scale 2x")
        stats = store.stats()
        assert stats.determinant == 4.0
        assert stats.trace == 4.0

    def test_unknown_preset(self, store):
        with pytest.raises(KeyError):
            store.apply_preset("Rotate Z 90°")

    def test_reset_matrix(self, store):
        store.apply_preset("Shear X")
        store.reset_matrix()
        assert store.active_matrix() == INITIAL_MATRIX_2D


class TestModes:
    def test_switch_to_3d(self, store):
        modes = record(store.mode_changed)
        matrices = record(store.matrix_changed)

        store.set_mode(DimensionMode.THREE_D)

        assert modes == [(DimensionMode.THREE_D,)]
        assert len(matrices[-1][0]) == 3
        assert store.active_vectors() == INITIAL_VECTORS_3D
        assert store.stats().trace == 3.0

    def test_same_mode_is_noop(self, store):
        modes = record(store.mode_changed)
        store.set_mode(DimensionMode.TWO_D)
        assert modes == []

    def test_modes_keep_separate_state(self, store):
        store.apply_preset("Scale 2x")
        store.set_mode(DimensionMode.THREE_D)
        store.apply_preset("Rotate Z 90°")
        store.set_mode(DimensionMode.TWO_D)
        assert store.active_matrix() == ((2.0, 0.0), (0.0, 2.0))


class TestVectors:
    def test_component_and_reset(self, store):
        emitted = record(store.vectors_changed)

        store.set_vector_component(0, "x", 5.0)
        assert store.active_vectors()[0].x == 5.0
        assert store.active_vectors()[1] == INITIAL_VECTORS_2D[1]

        store.reset_vector(0)
        assert store.active_vectors() == INITIAL_VECTORS_2D
        assert len(emitted) == 2

    def test_z_axis_in_2d_rejected(self, store):
        with pytest.raises(ValueError):
            store.set_vector_component(0, "z", 1.0)

    def test_3d_component(self, store):
        store.set_mode(DimensionMode.THREE_D)
        store.set_vector_component(2, "z", -2.0)
        assert store.active_vectors()[2].z == -2.0


class TestResetAndShare:
    def test_reset_all_covers_both_modes(self, store):
        store.apply_preset("Shear X")
        store.set_mode(DimensionMode.THREE_D)
        store.apply_preset("Scale 2x")
        store.set_insight(Insight(title="t", explanation="e", math_details=()))

        store.reset_all()

        assert store.matrix3d == ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))
        assert store.matrix2d == INITIAL_MATRIX_2D
        assert store.insight is None

    def test_share_and_restore(self, store):
        store.apply_preset("Rotate 90°")
        store.set_vector_component(1, "y", 4.0)
        store.set_mode(DimensionMode.THREE_D)
        token = store.share_token()

        other = Store()
        modes = record(other.mode_changed)
        assert other.restore(token) is True
        assert other.snapshot() == store.snapshot()
        assert modes == [(DimensionMode.THREE_D,)]

    def test_bad_token_keeps_scene(self, store):
        store.apply_preset("Shear X")
        before = store.snapshot()
        matrices = record(store.matrix_changed)

        assert store.restore("garbage!!") is False
        assert store.snapshot() == before
        assert matrices == []


class TestInsightFlags:
    def test_success_sets_insight_and_clears_loading(self, store):
        matrix, vectors = store.begin_insight_request()
        assert store.loading is True
        assert matrix == INITIAL_MATRIX_2D
        assert vectors == INITIAL_VECTORS_2D

        insight = Insight(title="Identity", explanation="Nothing moves.", math_details=("det = 1",))
        store.finish_insight_request(insight)
        assert store.insight == insight
        assert store.loading is False

    def test_failure_keeps_previous_insight(self, store):
        previous = Insight(title="Old", explanation="e", math_details=())
        store.set_insight(previous)
        loading = record(store.loading_changed)

        store.begin_insight_request()
        store.finish_insight_request(None)

        assert store.insight == previous
        assert loading == [(True,), (False,)]


class TestLinkedVectors:
    """Shared links may carry a different number of vectors than the start-up scene."""

    @pytest.fixture
    def three_vector_store(self, store):
        token = _b64({"vectors2D": [
            {"x": 1, "y": 1, "label": "a", "color": "red"},
            {"x": 2, "y": 0, "label": "b", "color": "green"},
            {"x": 0, "y": 3, "label": "c", "color": "blue"},
        ]})
        assert store.restore(token) is True
        return store

    def test_reset_of_extra_vector_keeps_it(self, three_vector_store):
        before = three_vector_store.active_vectors()
        emitted = record(three_vector_store.vectors_changed)

        assert three_vector_store.reset_vector(2) is False

        assert three_vector_store.active_vectors() == before
        assert emitted == []

    def test_reset_of_known_vector_still_works(self, three_vector_store):
        assert three_vector_store.reset_vector(0) is True
        assert three_vector_store.active_vectors()[0] == INITIAL_VECTORS_2D[0]
        assert three_vector_store.active_vectors()[2].label == "c"


class TestMoveVector:
    def test_single_update(self, store):
        emitted = record(store.vectors_changed)
        store.move_vector(1, -1.5, 2.25)

        assert store.active_vectors()[1].coords() == (-1.5, 2.25)
        assert len(emitted) == 1

    def test_keeps_z_in_3d(self, store):
        store.set_mode(DimensionMode.THREE_D)
        store.move_vector(0, 4.0, 5.0)
        assert store.active_vectors()[0].coords() == (4.0, 5.0, 1.0)

    def test_rejects_non_finite(self, store):
        with pytest.raises(ValueError):
            store.move_vector(0, math.inf, 0.0)
        assert store.active_vectors() == INITIAL_VECTORS_2D


class TestEditableRange:
    def test_entry_beyond_range_rejected(self, store):
        with pytest.raises(ValueError):
            store.set_matrix_entry(0, 0, MAX_ENTRY * 2)
        assert store.active_matrix() == INITIAL_MATRIX_2D

    def test_entry_at_limit_accepted(self, store):
        store.set_matrix_entry(1, 1, -MAX_ENTRY)
        assert store.active_matrix()[1][1] == -MAX_ENTRY

    def test_multiply_leaving_range_keeps_a(self, store):
        store.set_matrix(((1000.0, 0.0), (0.0, 1.0)))
        store.set_matrix_b(((2000.0, 0.0), (0.0, 1.0)))
        emitted = record(store.matrix_changed)

        assert store.multiply() is False
        assert store.active_matrix() == ((1000.0, 0.0), (0.0, 1.0))
        assert emitted == []

    def test_repeated_multiply_stays_in_range(self, store):
        store.set_matrix_b(((10.0, 0.0), (0.0, 1.0)))
        while store.multiply():
            pass
        assert abs(store.active_matrix()[0][0]) <= MAX_ENTRY
