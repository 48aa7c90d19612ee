from __future__ import annotations

import numpy as np
import pytest

from common.errors import ValidationError
from engine.core.geometry import MAX_VERTICES, MeshData, Vertex


def test_constructor_normalizes_dtype_and_contiguity() -> None:
    pos = np.asfortranarray(np.array([[0.0, 0.0, 0.0], [1.0, 2.0, 3.0]], dtype=np.float64))
    col = [[1, 0, 0], [0, 1, 0]]
    m = MeshData(pos, col, np.array([0, 1], dtype=np.int64))
    assert m.positions.dtype == np.float32
    assert m.colors.dtype == np.float32
    assert m.indices.dtype == np.uint16
    assert m.positions.flags.c_contiguous is True
    assert np.allclose(m.positions, pos)


def test_arrays_are_read_only_and_input_is_not_frozen() -> None:
    pos = np.zeros((2, 3), dtype=np.float32)
    m = MeshData(pos, np.zeros((2, 3)), [0, 1])
    with pytest.raises(ValueError):
        m.positions[0, 0] = 1.0
    # 呼び出し側の配列は書き込み可能なまま（コピーして凍結する）
    pos[0, 0] = 5.0
    assert m.positions[0, 0] == 0.0


def test_index_out_of_bounds_raises_validation_error() -> None:
    with pytest.raises(ValidationError):
        MeshData(np.zeros((2, 3)), np.zeros((2, 3)), [0, 2])


def test_negative_index_raises() -> None:
    with pytest.raises(ValidationError):
        MeshData(np.zeros((2, 3)), np.zeros((2, 3)), [-1, 0])


def test_mismatched_colors_raise() -> None:
    with pytest.raises(ValidationError):
        MeshData(np.zeros((2, 3)), np.zeros((3, 3)), [0])


def test_bad_shape_raises() -> None:
    with pytest.raises(ValidationError):
        MeshData(np.zeros((2, 2)), np.zeros((2, 2)), [0])


def test_vertex_budget_is_16bit() -> None:
    n = MAX_VERTICES + 1
    with pytest.raises(ValidationError):
        MeshData(np.zeros((n, 3)), np.zeros((n, 3)), [0])


def test_validation_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        MeshData(np.zeros((1, 3)), np.zeros((1, 3)), [1])


def test_empty_mesh_properties(mesh_empty: MeshData) -> None:
    assert mesh_empty.is_empty
    assert mesh_empty.positions.shape == (0, 3)
    assert mesh_empty.indices.shape == (0,)
    assert mesh_empty.n_vertices == 0


def test_from_vertices_and_back() -> None:
    verts = [Vertex((0.0, 1.0, 2.0), (1.0, 0.0, 0.0)), Vertex((3.0, 4.0, 5.0), (0.0, 0.0, 1.0))]
    m = MeshData.from_vertices(verts, [1, 0])
    assert m.vertices() == verts
    assert m.indices.tolist() == [1, 0]


def test_interleaved_layout(mesh_segment: MeshData) -> None:
    inter = mesh_segment.interleaved()
    assert inter.shape == (2, 6)
    assert inter.dtype == np.float32
    np.testing.assert_array_equal(inter[:, :3], mesh_segment.positions)
    np.testing.assert_array_equal(inter[:, 3:], mesh_segment.colors)


def test_equality_compares_contents(mesh_segment: MeshData) -> None:
    pos, col, idx = mesh_segment.as_arrays()
    assert MeshData(pos, col, idx) == mesh_segment
    assert MeshData(pos, col, [1, 0]) != mesh_segment
