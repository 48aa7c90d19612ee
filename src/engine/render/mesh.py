"""
どこで: `engine.render` の低レベルメッシュ層。
何を: `MeshData` を VBO（位置+色のインターリーブ）/IBO（uint16）へ転送し、
      マテリアル（プログラム）ごとの VAO を遅延生成して保持する。
なぜ: GPU 転送の詳細を GLEngine から切り離し、バッファ寿命を一元管理するため。
"""

from __future__ import annotations

from typing import Any

from engine.core.geometry import MeshData


class GpuMesh:
    """
    登録済みメッシュ 1 件ぶんの GPU リソース。
    """

    # 頂点レイアウト: vec3 位置 + vec3 色（float32）
    VERTEX_FORMAT = "3f 3f"
    ATTRIBUTES = ("in_pos", "in_color")
    INDEX_ELEMENT_SIZE = 2  # uint16

    def __init__(self, ctx: Any, mesh: MeshData):
        """
        ctx: moderngl コンテキスト
        mesh: 転送元のメッシュデータ（登録後は不変）
        VBO (Vertex Buffer Object): 頂点データ（位置+色）を格納するメモリ。
        IBO (Index Buffer Object): 描画順の index（uint16）を格納するメモリ。
        VAO (Vertex Array Object): VBO/IBO とシェーダ入力の対応付け。プログラムごとに必要。
        """
        self.ctx = ctx
        self.index_count: int = mesh.n_indices
        self.vertex_count: int = mesh.n_vertices
        self.vbo: Any = None
        self.ibo: Any = None
        self._vaos: dict[int, Any] = {}

        # 空メッシュは描画数 0 として扱い、バッファを確保しない
        if mesh.is_empty or self.index_count == 0:
            return
        self.vbo = ctx.buffer(mesh.interleaved().tobytes())
        self.ibo = ctx.buffer(mesh.indices.tobytes())

    def vao_for(self, program: Any) -> Any:
        """`program` 用の VAO を返す（初回のみ生成）。空メッシュなら None。"""
        if self.vbo is None:
            return None
        key = id(program)
        vao = self._vaos.get(key)
        if vao is None:
            vao = self.ctx.vertex_array(
                program,
                [(self.vbo, self.VERTEX_FORMAT, *self.ATTRIBUTES)],
                index_buffer=self.ibo,
                index_element_size=self.INDEX_ELEMENT_SIZE,
            )
            self._vaos[key] = vao
        return vao

    def release(self) -> None:
        """GPU のメモリを解放する（終了時に使う）。"""
        for vao in self._vaos.values():
            vao.release()
        self._vaos.clear()
        if self.vbo is not None:
            self.vbo.release()
            self.vbo = None
        if self.ibo is not None:
            self.ibo.release()
            self.ibo = None


__all__ = ["GpuMesh"]
