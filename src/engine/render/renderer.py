"""
どこで: `engine.render` の高レベル描画。
何を: ModernGL による `Engine` 実装 `GLEngine`。マテリアル（プログラム）とメッシュ（VBO/IBO）を
      登録し、`FramePacket` の各オブジェクトを MVP 付きで描画する。
なぜ: 毎フレームの描画/リソース寿命を一箇所に集約し、アプリ側は packet を返すだけにするため。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import moderngl as mgl
import numpy as np

from common.errors import CompilationError, ValidationError
from engine.core import transform_utils as tf
from engine.core.geometry import MeshData
from engine.runtime.packet import FramePacket

from .backend import check_shader_source
from .mesh import GpuMesh
from .types import DrawMode, MaterialHandle, MeshHandle

_GL_MODES = {
    DrawMode.POINTS: mgl.POINTS,
    DrawMode.LINES: mgl.LINES,
    DrawMode.LINE_STRIP: mgl.LINE_STRIP,
    DrawMode.TRIANGLES: mgl.TRIANGLES,
}


@dataclass
class _Material:
    program: Any
    mode: int


class GLEngine:
    """
    ModernGL コンテキスト上で `Engine` 能力集合を提供する。
    カメラ（view/projection）は GLEngine が保持し、packet の transform は model 行列として扱う。
    """

    def __init__(
        self,
        mgl_context: Any,
        *,
        view: np.ndarray | None = None,
        projection: np.ndarray | None = None,
        pulse: float = 0.0,
    ):
        self.ctx = mgl_context
        self._logger = logging.getLogger(__name__)
        self._view = tf.identity() if view is None else np.asarray(view, dtype=np.float32)
        self._projection = (
            tf.identity() if projection is None else np.asarray(projection, dtype=np.float32)
        )
        self._pulse = float(pulse)
        self._time_value = 0.0
        self._materials: dict[MaterialHandle, _Material] = {}
        self._meshes: dict[MeshHandle, GpuMesh] = {}
        self._next_id = 0
        # 直近フレームの描画数（ログ/デバッグ用）
        self._last_object_count = 0

        self.ctx.enable(mgl.DEPTH_TEST)

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    # --------------------------------------------------------------------- #
    # Engine                                                                 #
    # --------------------------------------------------------------------- #
    def register_material(
        self,
        vertex_shader: str | bytes,
        fragment_shader: str | bytes,
        draw_mode: DrawMode,
    ) -> MaterialHandle:
        """シェーダをコンパイル/リンクしてマテリアルを登録する。失敗は `CompilationError`。"""
        vs = check_shader_source("vertex", vertex_shader)
        fs = check_shader_source("fragment", fragment_shader)
        try:
            program = self.ctx.program(vertex_shader=vs, fragment_shader=fs)
        except mgl.Error as e:
            raise CompilationError(str(e)) from e
        mode = DrawMode(draw_mode)
        handle = MaterialHandle(self._new_id())
        self._materials[handle] = _Material(program=program, mode=_GL_MODES[mode])
        self._logger.info("material %d compiled (%s)", handle.id, mode.value)
        return handle

    def register_mesh(self, mesh: MeshData) -> MeshHandle:
        """メッシュを GPU へ転送して登録する。"""
        if not isinstance(mesh, MeshData):
            raise ValidationError(f"register_mesh expects MeshData, got {type(mesh)!r}")
        if mesh.n_indices and int(mesh.indices.max()) >= mesh.n_vertices:
            raise ValidationError("mesh index out of bounds")
        handle = MeshHandle(self._new_id())
        self._meshes[handle] = GpuMesh(self.ctx, mesh)
        self._logger.info(
            "mesh %d uploaded: verts=%d inds=%d", handle.id, mesh.n_vertices, mesh.n_indices
        )
        return handle

    def set_time_uniform(self, value: float) -> None:
        # プログラムへの書き込みは draw 時にまとめて行う
        self._time_value = float(value)

    def draw(self, packet: FramePacket) -> None:
        """packet の各オブジェクトを順に描画する。"""
        view_proj = self._projection @ self._view
        for obj in packet.objects:
            material = self._materials.get(obj.material)
            if material is None:
                raise ValidationError(f"unknown material handle: {obj.material}")
            gpu = self._meshes.get(obj.mesh)
            if gpu is None:
                raise ValidationError(f"unknown mesh handle: {obj.mesh}")
            vao = gpu.vao_for(material.program)
            if vao is None:
                continue
            mvp = (view_proj @ obj.transform).astype(np.float32)
            self._write_uniforms(material.program, mvp)
            vao.render(material.mode)
        self._last_object_count = len(packet.objects)
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(
                "frame %d drawn: objects=%d t=%.4f",
                packet.frame_id,
                self._last_object_count,
                self._time_value,
            )

    # --------------------------------------------------------------------- #
    # Camera / lifecycle                                                     #
    # --------------------------------------------------------------------- #
    def set_camera(self, view: np.ndarray, projection: np.ndarray) -> None:
        self._view = np.asarray(view, dtype=np.float32)
        self._projection = np.asarray(projection, dtype=np.float32)

    def release(self) -> None:
        """GPU リソースを解放。"""
        for gpu in self._meshes.values():
            gpu.release()
        self._meshes.clear()
        for material in self._materials.values():
            material.program.release()
        self._materials.clear()

    # --------------------------------------------------------------------- #
    # Internal helpers                                                      #
    # --------------------------------------------------------------------- #
    def _write_uniforms(self, program: Any, mvp: np.ndarray) -> None:
        # GLSL は列優先なので転置して書き込む
        mvp_u = program.get("mvp", None)
        if mvp_u is not None:
            mvp_u.write(np.ascontiguousarray(mvp.T).tobytes())
        time_u = program.get("time", None)
        if time_u is not None:
            time_u.value = self._time_value
        pulse_u = program.get("pulse", None)
        if pulse_u is not None:
            pulse_u.value = self._pulse


__all__ = ["GLEngine"]
