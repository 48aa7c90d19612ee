from __future__ import annotations

import math
import warnings

import numpy as np
import pytest

from engine.core.geometry import MeshData
from shapes.paper_fold import paper_fold

COLOR = (0.0, 0.3, 1.0)
SQRT2 = math.sqrt(2.0)


def _reference_points(depth: int) -> list[tuple[float, float]]:
    """漸化式を float64 でそのまま書き下した参照実装（平面座標）。"""
    horiz, vert = 1.0, 1.0 / SQRT2
    x = y = 0.0
    cycle = False
    out: list[tuple[float, float]] = []
    for _ in range(depth):
        if cycle:
            y += vert
            horiz *= -2.0
            out += [(x + horiz, y), (x - horiz, y)]
        else:
            x += horiz
            vert *= -2.0
            out += [(x, y + vert), (x, y - vert)]
        cycle = not cycle
    return out


def test_depth_zero_is_empty() -> None:
    m = paper_fold(0, COLOR)
    assert isinstance(m, MeshData)
    assert m.positions.shape == (0, 3)
    assert m.indices.shape == (0,)


def test_depth_one_scenario() -> None:
    m = paper_fold(1, COLOR)
    expected = np.array([[1.0, 0.0, -SQRT2], [1.0, 0.0, SQRT2]], dtype=np.float32)
    np.testing.assert_allclose(m.positions, expected, rtol=1e-6)
    assert m.indices.tolist() == [0, 1]


def test_depth_two_scenario() -> None:
    m = paper_fold(2, COLOR)
    expected = np.array(
        [
            [1.0, 0.0, -SQRT2],
            [1.0, 0.0, SQRT2],
            [-1.0, 0.0, -SQRT2],
            [3.0, 0.0, -SQRT2],
        ],
        dtype=np.float32,
    )
    np.testing.assert_allclose(m.positions, expected, rtol=1e-6)
    assert m.indices.tolist() == [0, 1, 2, 3]


def test_points_lie_in_y_zero_plane() -> None:
    m = paper_fold(20, COLOR)
    assert np.all(m.positions[:, 1] == 0.0)


@pytest.mark.parametrize("depth", [3, 7, 16, 40])
def test_matches_reference_recurrence(depth: int) -> None:
    m = paper_fold(depth, COLOR)
    ref = np.array(_reference_points(depth))
    np.testing.assert_allclose(m.positions[:, 0], ref[:, 0], rtol=1e-5)
    np.testing.assert_allclose(m.positions[:, 2], ref[:, 1], rtol=1e-5)


@pytest.mark.parametrize("depth", [0, 1, 5, 50])
def test_counts_colors_and_identity_indices(depth: int) -> None:
    color = (0.25, 0.5, 0.75)
    m = paper_fold(depth, color)
    assert m.n_vertices == 2 * depth
    assert m.indices.tolist() == list(range(2 * depth))
    assert np.all(m.colors == np.asarray(color, dtype=np.float32))


def test_deterministic_bit_identical() -> None:
    a = paper_fold(50, COLOR)
    b = paper_fold(50, COLOR)
    assert a.positions.tobytes() == b.positions.tobytes()
    assert a.colors.tobytes() == b.colors.tobytes()
    assert a.indices.tobytes() == b.indices.tobytes()


def test_large_depth_overflows_without_error() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        m = paper_fold(600, COLOR)
    assert m.n_vertices == 1200
    # 大きさは 2 ステップごとに約 2 倍になり、float32 の範囲を超えると非有限になる
    assert not np.all(np.isfinite(m.positions))
    assert np.all(np.isfinite(m.positions[:100]))


@pytest.mark.parametrize("depth", [-1, 2.5, "3", float("inf"), float("nan"), None])
def test_invalid_depth_raises(depth: object) -> None:
    with pytest.raises(ValueError):
        paper_fold(depth, COLOR)  # type: ignore[arg-type]


def test_depth_over_index_budget_raises() -> None:
    with pytest.raises(ValueError):
        paper_fold(32769, COLOR)


def test_color_must_have_three_channels() -> None:
    with pytest.raises(ValueError):
        paper_fold(2, (1.0, 0.0))
