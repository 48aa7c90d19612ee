"""
どこで: `shapes` パッケージ（関数登録）。
何を: ビルトインのメッシュ生成関数を import 副作用で登録し、名前で解決できるようにする。
なぜ: 生成ステージの拡張点を一箇所に集約し、アプリ/CLI から同じ経路で再利用するため。
"""

# 関数版 shape 定義を import して登録（副作用）
from . import paper_fold as _register_paper_fold  # noqa: F401
from . import rainbow_cube as _register_rainbow_cube  # noqa: F401
from .registry import generate, get_shape, is_shape_registered, list_shapes, shape  # re-export

__all__ = [
    "shape",
    "get_shape",
    "generate",
    "list_shapes",
    "is_shape_registered",
]
