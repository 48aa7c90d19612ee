"""
どこで: `shapes.paper_fold`。
何を: 紙折り（paper-folding）型フラクタル曲線の頂点/index バッファを決定的に生成する。
なぜ: 折り回数 `depth` と色だけから描画用 `MeshData` を作り、レンダラへそのまま登録できるようにするため。

漸化式（平面座標 (x, y) を 3D の y=0 平面へ (x, 0, y) として埋め込む）:

    horiz = 1, vert = 1/√2, cycle = False
    depth 回:
      cycle:     y += vert;  horiz *= -2;  emit (x + horiz, y), (x - horiz, y)
      not cycle: x += horiz; vert  *= -2;  emit (x, y + vert),  (x, y - vert)
      cycle = not cycle

- 頂点数は 2*depth、index は 0..2*depth-1 の恒等列。生成器自体は点同士を結ばない。
  `DrawMode.LINES` で描くと出力順に (0,1), (2,3), ... が線分になる。
- 座標は 2 ステップごとに約 2 倍になる（≈ 2^(depth/2)）。float32 で計算するため
  depth が大きいと inf/nan になるが、クランプはしない（下流の縮小変換で補う前提）。
"""

from __future__ import annotations

import math
from typing import Any, Sequence

import numpy as np

from engine.core.geometry import MAX_VERTICES, MeshData

from .registry import shape

DEFAULT_COLOR = (0.0, 0.3, 1.0)


def _fold_points(depth: int) -> np.ndarray:
    """漸化式を回して平面座標 (2*depth, 2) float32 を返す。"""
    pts = np.empty((2 * depth, 2), dtype=np.float32)
    two = np.float32(-2.0)
    horiz = np.float32(1.0)
    vert = np.float32(1.0 / math.sqrt(2.0))
    x = np.float32(0.0)
    y = np.float32(0.0)
    cycle = False
    # 大きな depth でのオーバーフロー（inf/nan）は仕様上の性質なので警告を抑止する
    with np.errstate(over="ignore", invalid="ignore"):
        for i in range(depth):
            j = 2 * i
            if cycle:
                y = y + vert
                horiz = horiz * two
                pts[j] = (x + horiz, y)
                pts[j + 1] = (x - horiz, y)
            else:
                x = x + horiz
                vert = vert * two
                pts[j] = (x, y + vert)
                pts[j + 1] = (x, y - vert)
            cycle = not cycle
    return pts


@shape
def paper_fold(
    depth: int = 50, color: Sequence[float] = DEFAULT_COLOR, **params: Any
) -> MeshData:
    """紙折り曲線を生成します。

    Parameters
    ----------
    depth : int, default 50
        折り回数。0 で空メッシュ。頂点数は `2 * depth`（16bit index 予算内）。
    color : Sequence[float], default (0.0, 0.3, 1.0)
        全頂点に付与する RGB。値はそのまま格納する。

    Returns
    -------
    MeshData
        `positions (2*depth, 3)`・`colors`・`indices = arange(2*depth)`。

    Raises
    ------
    ValueError
        depth が負/非整数、頂点数が 16bit 予算を超える、color が 3 要素でない場合。
    """
    try:
        n = int(depth)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"depth must be a non-negative integer, got {depth!r}") from None
    if n != depth or n < 0:
        raise ValueError(f"depth must be a non-negative integer, got {depth!r}")
    if 2 * n > MAX_VERTICES:
        raise ValueError(f"depth {n} exceeds the 16-bit index budget (max {MAX_VERTICES // 2})")
    rgb = np.asarray(color, dtype=np.float32)
    if rgb.shape != (3,):
        raise ValueError(f"color must have exactly 3 channels, got {color!r}")

    pts = _fold_points(n)
    positions = np.zeros((2 * n, 3), dtype=np.float32)
    positions[:, 0] = pts[:, 0]
    positions[:, 2] = pts[:, 1]
    colors = np.broadcast_to(rgb, (2 * n, 3))
    indices = np.arange(2 * n, dtype=np.uint16)
    return MeshData(positions, colors, indices)
