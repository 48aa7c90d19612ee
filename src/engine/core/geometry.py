"""
メッシュデータ型 `MeshData`（プロジェクト中核モジュール）

本モジュールは、レンダラへ登録する唯一のジオメトリ表現 `MeshData` を提供する。
生成（shapes）と描画（engine.render）の境界で受け渡す不変バッファであり、
GPU へはこの配列をそのまま転送する。

データモデル（不変条件）:
- `positions: float32 ndarray (N, 3)`: 頂点位置（行は XYZ）。
- `colors: float32 ndarray (N, 3)`: 頂点色（行は RGB, 0–1 を想定するが検査しない）。
- `indices: uint16 ndarray (K,)`: 描画順の頂点 index。すべて `< N`。
- 16bit index 予算のため `N <= 65536`。
- 生成後は読み取り専用（`setflags(write=False)`）。

直感図（paper_fold(depth=2) の場合）:

    # positions (N=4)           indices (K=4)
    #   0  [ 1.0, 0, -1.414]      [0, 1, 2, 3]
    #   1  [ 1.0, 0,  1.414]
    #   2  [-1.0, 0, -1.414]
    #   3  [ 3.0, 0, -1.414]
    #
    # 線描画（LINES）では (0,1), (2,3) が 1 本ずつの線分になる。

補足:
- 空メッシュは `positions.shape==(0,3)`, `indices.shape==(0,)`（描画数 0 の正当な入力）。
- 違反は `common.errors.ValidationError`（`ValueError` 派生）。

使用例:
    from engine.core.geometry import MeshData
    mesh = MeshData.from_vertices([Vertex((0, 0, 0), (1, 0, 0))], [0])
    positions, colors, indices = mesh.as_arrays()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from common.errors import ValidationError
from common.types import RGB, Vec3

# 16bit index で参照できる頂点数の上限
MAX_VERTICES = 1 << 16


@dataclass(frozen=True)
class Vertex:
    """位置と色を持つ 1 頂点（不変）。"""

    position: Vec3
    color: RGB


def _as_rows(name: str, arr: np.ndarray | Sequence[Sequence[float]]) -> np.ndarray:
    out = np.array(arr, dtype=np.float32)
    if out.size == 0:
        return np.empty((0, 3), dtype=np.float32)
    if out.ndim != 2 or out.shape[1] != 3:
        raise ValidationError(f"{name} は形状 (N, 3) の配列である必要があります: {out.shape}")
    return np.ascontiguousarray(out)


def _normalize_mesh_input(
    positions: np.ndarray | Sequence[Sequence[float]],
    colors: np.ndarray | Sequence[Sequence[float]],
    indices: np.ndarray | Sequence[int],
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """`MeshData` 生成時の内部正規化ヘルパ。"""

    pos_arr = _as_rows("positions", positions)
    col_arr = _as_rows("colors", colors)
    if pos_arr.shape[0] != col_arr.shape[0]:
        raise ValidationError(
            f"positions と colors の行数が一致しません: {pos_arr.shape[0]} != {col_arr.shape[0]}"
        )
    n = pos_arr.shape[0]
    if n > MAX_VERTICES:
        raise ValidationError(f"頂点数 {n} は 16bit index の上限 {MAX_VERTICES} を超えています")

    raw = np.asarray(indices)
    if raw.size == 0:
        idx_arr = np.empty((0,), dtype=np.uint16)
    else:
        if raw.ndim != 1:
            raise ValidationError("indices は 1 次元配列である必要があります。")
        if not np.issubdtype(raw.dtype, np.integer):
            raise ValidationError(f"indices は整数配列である必要があります: {raw.dtype}")
        if int(raw.min()) < 0:
            raise ValidationError("indices に負の値が含まれています。")
        bad = int(raw.max())
        if bad >= n:
            raise ValidationError(f"index {bad} は頂点数 {n} の範囲外です")
        idx_arr = np.array(raw, dtype=np.uint16, order="C")

    for a in (pos_arr, col_arr, idx_arr):
        a.setflags(write=False)
    return pos_arr, col_arr, idx_arr


class MeshData:
    """頂点（位置+色）と index 列の不変バッファ。

    フィールド:
    - `positions (N,3) float32`
    - `colors (N,3) float32`
    - `indices (K,) uint16`
    """

    __slots__ = ("positions", "colors", "indices")

    positions: np.ndarray
    colors: np.ndarray
    indices: np.ndarray

    def __init__(
        self,
        positions: np.ndarray | Sequence[Sequence[float]],
        colors: np.ndarray | Sequence[Sequence[float]],
        indices: np.ndarray | Sequence[int],
    ) -> None:
        pos, col, idx = _normalize_mesh_input(positions, colors, indices)
        self.positions = pos
        self.colors = col
        self.indices = idx

    # ── ファクトリ ───────────────────
    @classmethod
    def from_vertices(cls, vertices: Iterable[Vertex], indices: Sequence[int]) -> "MeshData":
        """`Vertex` 列と index 列から生成する。"""
        verts = list(vertices)
        positions = [v.position for v in verts]
        colors = [v.color for v in verts]
        return cls(positions, colors, indices)

    @classmethod
    def empty(cls) -> "MeshData":
        return cls(np.empty((0, 3)), np.empty((0, 3)), np.empty((0,), dtype=np.uint16))

    # ── 参照 ───────────────────────
    def as_arrays(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """`(positions, colors, indices)` を読み取り専用のまま返す。"""
        return self.positions, self.colors, self.indices

    def vertices(self) -> list[Vertex]:
        """`Vertex` のリストとして取り出す（テスト/デバッグ用。大規模データでは遅い）。"""
        return [
            Vertex(
                (float(p[0]), float(p[1]), float(p[2])),
                (float(c[0]), float(c[1]), float(c[2])),
            )
            for p, c in zip(self.positions, self.colors)
        ]

    def interleaved(self) -> np.ndarray:
        """GPU 転送用に `[x, y, z, r, g, b]` を行とする (N, 6) float32 を返す。"""
        return np.ascontiguousarray(np.hstack([self.positions, self.colors]), dtype=np.float32)

    @property
    def is_empty(self) -> bool:
        return self.positions.shape[0] == 0

    @property
    def n_vertices(self) -> int:
        return int(self.positions.shape[0])

    @property
    def n_indices(self) -> int:
        return int(self.indices.shape[0])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MeshData):
            return NotImplemented
        return (
            np.array_equal(self.positions, other.positions, equal_nan=True)
            and np.array_equal(self.colors, other.colors, equal_nan=True)
            and np.array_equal(self.indices, other.indices)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"MeshData(N={self.n_vertices}, K={self.n_indices})"


__all__ = ["MAX_VERTICES", "MeshData", "Vertex"]
