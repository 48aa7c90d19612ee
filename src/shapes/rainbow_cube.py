from __future__ import annotations

from typing import Any

import numpy as np

from engine.core.geometry import MeshData

from .registry import shape

# 一辺 2（±1）の立方体。角ごとに色を 1 つ持つ
_CUBE_POSITIONS = np.array(
    [
        [-1.0, -1.0, -1.0],
        [1.0, -1.0, -1.0],
        [1.0, 1.0, -1.0],
        [-1.0, 1.0, -1.0],
        [-1.0, -1.0, 1.0],
        [1.0, -1.0, 1.0],
        [1.0, 1.0, 1.0],
        [-1.0, 1.0, 1.0],
    ],
    dtype=np.float32,
)

_CUBE_COLORS = np.array(
    [
        [0.0, 1.0, 1.0],
        [1.0, 0.0, 1.0],
        [1.0, 1.0, 0.0],
        [0.0, 1.0, 1.0],
        [1.0, 0.0, 1.0],
        [1.0, 1.0, 0.0],
        [0.0, 1.0, 1.0],
        [1.0, 0.0, 1.0],
    ],
    dtype=np.float32,
)

# 12 三角形（各面 2 枚）。隣接三角形で共有辺の向きが逆になる巻き順
_CUBE_INDICES = np.array(
    [
        3, 1, 0, 2, 1, 3,
        2, 5, 1, 6, 5, 2,
        6, 4, 5, 7, 4, 6,
        7, 0, 4, 3, 0, 7,
        7, 2, 3, 6, 2, 7,
        0, 5, 4, 1, 5, 0,
    ],
    dtype=np.uint16,
)  # fmt: skip


@shape
def rainbow_cube(**params: Any) -> MeshData:
    """角ごとに色の異なる立方体（8 頂点・36 index・TRIANGLES 用）を返します。"""
    return MeshData(_CUBE_POSITIONS, _CUBE_COLORS, _CUBE_INDICES)
