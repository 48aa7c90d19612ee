"""
どこで: `engine.render` サブパッケージ。
何を: 描画エンジンの能力集合（Engine/HeadlessEngine）と ModernGL 実装（GLEngine/GpuMesh/Shader）。
なぜ: 計算（shapes/api）と描画の責務を分離し、GPU リソース管理を局所化するため。

`GLEngine` は moderngl を import するため、ここでは再輸出しない（`engine.render.renderer` から直接 import）。
"""

from .backend import Engine, HeadlessEngine
from .types import DrawMode, MaterialHandle, MeshHandle

__all__ = ["Engine", "HeadlessEngine", "DrawMode", "MaterialHandle", "MeshHandle"]
