"""Tests for shareable snapshot tokens."""
import base64
import json

import pytest

from linearlab.model.presets import default_snapshot
from linearlab.model.snapshot import decode_snapshot, encode_snapshot, share_url, token_from_text
from linearlab.model.types import DimensionMode, Snapshot, Vector


def _b64(obj) -> str:
    text = obj if isinstance(obj, str) else json.dumps(obj)
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


@pytest.fixture
def scene() -> Snapshot:
    return Snapshot(
        mode=DimensionMode.THREE_D,
        matrix2d=((0.1, -2.5), (1e-7, 3.0)),
        vectors2d=(
            Vector(x=1.0, y=2.0, label="u", color="#f43f5e"),
            Vector(x=-0.3, y=0.7, label="α", color="#0ea5e9"),
        ),
        matrix3d=((1.0, 0.0, 0.5), (0.0, 2.0, 0.0), (0.0, 0.0, -1.0)),
        vectors3d=(Vector(x=1.0, y=1.0, z=0.333, label="w", color="#f59e0b"),),
    )


class TestRoundTrip:
    def test_reproduces_scene_exactly(self, scene):
        assert decode_snapshot(encode_snapshot(scene)) == scene

    def test_default_scene(self):
        snap = default_snapshot()
        assert decode_snapshot(encode_snapshot(snap)) == snap

    def test_payload_keys(self, scene):
        data = json.loads(base64.b64decode(encode_snapshot(scene)))
        assert set(data) == {"mode", "matrix2D", "vectors2D", "matrix3D", "vectors3D"}
        assert data["mode"] == "3D"
        assert data["vectors2D"][0] == {"x": 1.0, "y": 2.0, "label": "u", "color": "#f43f5e"}
        assert data["vectors3D"][0]["z"] == 0.333

    def test_decodes_from_full_link(self, scene):
        url = share_url(encode_snapshot(scene))
        assert decode_snapshot(url) == scene

    def test_tolerates_missing_padding(self, scene):
        token = encode_snapshot(scene).rstrip("=")
        assert decode_snapshot(token) == scene


class TestMalformed:
    @pytest.mark.parametrize("token", [
        "",
        "not base64 at all!!!",
        _b64("hello world"),
        _b64("[1, 2, 3]"),
        _b64({"mode": "4D"}),
        _b64({"matrix2D": [[1, 0, 0], [0, 1, 0]]}),
        _b64({"matrix2D": [[1, "a"], [0, 1]]}),
        _b64('{"matrix2D": [[NaN, 0], [0, 1]]}'),
        _b64({"matrix3D": [[1, 0], [0, 1]]}),
        _b64({"vectors2D": "u"}),
        _b64({"vectors2D": [{"x": 1, "label": "u", "color": "red"}]}),
        _b64({"vectors3D": [{"x": 1, "y": 2, "label": "w", "color": "red"}]}),
        _b64({"vectors2D": [{"x": 1, "y": 2, "label": 5, "color": "red"}]}),
        base64.b64encode(b"\xff\xfe\xfa").decode("ascii"),
        _b64({"matrix2D": [[1500000, 0], [0, 1]]}),
        _b64({"vectors3D": [{"x": 0, "y": 0, "z": -2e6, "label": "w", "color": "red"}]}),
    ])
    def test_returns_none(self, token):
        assert decode_snapshot(token) is None

    @pytest.mark.parametrize("payload", [
        '{"matrix2D": [[1' + "0" * 400 + ', 0], [0, 1]]}',
        '{"vectors2D": [{"x": 1' + "0" * 400 + ', "y": 0, "label": "u", "color": "red"}]}',
        "[" * 100000 + "]" * 100000,
    ], ids=["huge-int-entry", "huge-int-component", "deep-nesting"])
    def test_oversized_payloads_return_none(self, payload):
        assert decode_snapshot(_b64(payload)) is None

    def test_failure_is_logged(self, caplog):
        with caplog.at_level("WARNING", logger="linearlab.model.snapshot"):
            decode_snapshot("%%%")
        assert "Failed to restore state" in caplog.text


class TestPartialPayload:
    def test_missing_keys_keep_defaults(self, scene):
        snap = decode_snapshot(_b64({"mode": "2D"}), defaults=scene)
        assert snap.mode is DimensionMode.TWO_D
        assert snap.matrix2d == scene.matrix2d
        assert snap.vectors3d == scene.vectors3d

    def test_only_matrix(self):
        snap = decode_snapshot(_b64({"matrix2D": [[2, 0], [0, 2]]}))
        assert snap.matrix2d == ((2.0, 0.0), (0.0, 2.0))
        assert snap.vectors2d == default_snapshot().vectors2d

    def test_2d_vectors_drop_stray_z(self):
        payload = {"vectors2D": [{"x": 1, "y": 2, "z": 3, "label": "u", "color": "red"}]}
        snap = decode_snapshot(_b64(payload))
        assert snap.vectors2d == (Vector(x=1.0, y=2.0, label="u", color="red"),)


class TestLinks:
    def test_share_url_replaces_fragment(self):
        assert share_url("abc", base="https://example.org/lab#old") == "https://example.org/lab#abc"

    def test_token_from_link(self):
        assert token_from_text("  https://example.org/#abc%3D%3D \n") == "abc=="

    def test_bare_token(self):
        assert token_from_text("abc==") == "abc=="
