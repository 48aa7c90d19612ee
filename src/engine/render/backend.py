"""
どこで: `engine.render` のバックエンド契約。
何を: アプリが利用する描画エンジンの能力集合 `Engine` Protocol と、GPU を使わない
      `HeadlessEngine`（検証・記録のみ）を定義。
なぜ: アプリ/フレームドライバを GL 実装から切り離し、ウィンドウなしでも同じ経路で動かすため。

能力集合:
- `register_material(vertex_shader, fragment_shader, draw_mode) -> MaterialHandle`
  不正なシェーダは `CompilationError`。
- `register_mesh(mesh) -> MeshHandle`
  範囲外 index は `ValidationError`（`MeshData` 生成時点で検出済みのものは再検査のみ）。
- `set_time_uniform(value)`
  シェーダ側の時刻 uniform を更新する片方向通知。
- `draw(packet)`
  1 フレーム分の `FramePacket` を描画（ヘッドレスでは記録）する。
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from common.errors import CompilationError, ValidationError
from engine.core.geometry import MeshData

from .shader import as_source
from .types import DrawMode, MaterialHandle, MeshHandle

if TYPE_CHECKING:
    from engine.runtime.packet import FramePacket

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"^\s*#version\s+\d+", re.MULTILINE)
_MAIN_RE = re.compile(r"\bvoid\s+main\s*\(\s*(void)?\s*\)")


@runtime_checkable
class Engine(Protocol):
    """アプリから見た描画エンジンの最小インターフェイス。"""

    def register_material(
        self,
        vertex_shader: str | bytes,
        fragment_shader: str | bytes,
        draw_mode: DrawMode,
    ) -> MaterialHandle: ...

    def register_mesh(self, mesh: MeshData) -> MeshHandle: ...

    def set_time_uniform(self, value: float) -> None: ...

    def draw(self, packet: FramePacket) -> None: ...


def check_shader_source(stage: str, src: str | bytes) -> str:
    """シェーダソースの最低限の体裁（`#version` と `main`）を検査して str を返す。

    GL コンパイラを使えない環境での事前検査。満たさなければ `CompilationError`。
    """
    try:
        text = as_source(src)
    except (TypeError, UnicodeDecodeError) as e:
        raise CompilationError(f"{stage} shader: unreadable source ({e})") from e
    if not _VERSION_RE.search(text):
        raise CompilationError(f"{stage} shader: missing #version directive")
    if not _MAIN_RE.search(text):
        raise CompilationError(f"{stage} shader: missing entry point 'void main()'")
    return text


class HeadlessEngine:
    """GPU を使わずに能力集合を満たす実装。

    - 登録内容を保持し、`draw` では packet の参照先が登録済みかだけを検査して計数する。
    - テストとヘッドレス実行（CLI の代替モード）で使う。
    """

    def __init__(self) -> None:
        self.materials: dict[MaterialHandle, DrawMode] = {}
        self.meshes: dict[MeshHandle, MeshData] = {}
        self.time_value: float | None = None
        self.frames_drawn: int = 0
        self.objects_drawn: int = 0
        self.last_packet: FramePacket | None = None
        self._next_id = 0

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def register_material(
        self,
        vertex_shader: str | bytes,
        fragment_shader: str | bytes,
        draw_mode: DrawMode,
    ) -> MaterialHandle:
        check_shader_source("vertex", vertex_shader)
        check_shader_source("fragment", fragment_shader)
        handle = MaterialHandle(self._new_id())
        self.materials[handle] = DrawMode(draw_mode)
        logger.debug("material registered: %s (%s)", handle, draw_mode)
        return handle

    def register_mesh(self, mesh: MeshData) -> MeshHandle:
        if not isinstance(mesh, MeshData):
            raise ValidationError(f"register_mesh expects MeshData, got {type(mesh)!r}")
        if mesh.n_indices and int(mesh.indices.max()) >= mesh.n_vertices:
            raise ValidationError("mesh index out of bounds")
        handle = MeshHandle(self._new_id())
        self.meshes[handle] = mesh
        logger.debug("mesh registered: %s (%r)", handle, mesh)
        return handle

    def set_time_uniform(self, value: float) -> None:
        self.time_value = float(value)

    def draw(self, packet: FramePacket) -> None:
        for obj in packet.objects:
            if obj.mesh not in self.meshes:
                raise ValidationError(f"unknown mesh handle: {obj.mesh}")
            if obj.material not in self.materials:
                raise ValidationError(f"unknown material handle: {obj.material}")
        self.frames_drawn += 1
        self.objects_drawn += len(packet.objects)
        self.last_packet = packet


__all__ = ["Engine", "HeadlessEngine", "check_shader_source"]
