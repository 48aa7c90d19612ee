"""
どこで: `engine.runtime` の結果コンテナ。
何を: 1 フレームぶんの描画要求 `FramePacket`（`RenderObject` の順序付き列と frame_id）。
なぜ: アプリ → バックエンドの受け渡しを明示し、毎フレーム使い捨てる値として扱うため。
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from engine.render.types import MaterialHandle, MeshHandle


@dataclass(frozen=True)
class RenderObject:
    """描画 1 件: (メッシュ, マテリアル, 4x4 変換行列)。"""

    mesh: MeshHandle
    material: MaterialHandle
    transform: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        m = np.array(self.transform, dtype=np.float32)
        if m.shape != (4, 4):
            raise ValueError(f"transform は (4, 4) である必要があります: {m.shape}")
        m.setflags(write=False)
        object.__setattr__(self, "transform", m)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RenderObject):
            return NotImplemented
        return (
            self.mesh == other.mesh
            and self.material == other.material
            and np.array_equal(self.transform, other.transform)
        )

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True)
class FramePacket:
    """バックエンドへ渡す 1 フレーム分の描画要求（順序は描画順）。"""

    objects: tuple[RenderObject, ...] = ()
    frame_id: int = 0  # アプリ側で連番付与

    def __len__(self) -> int:
        return len(self.objects)


__all__ = ["RenderObject", "FramePacket"]
