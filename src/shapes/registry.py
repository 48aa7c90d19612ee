"""
どこで: `shapes.registry`。
何を: メッシュ生成関数の名前表。`@shape` で登録し、設定/CLI の文字列から `generate()` で呼ぶ。
なぜ: アプリが生成関数を直接 import せず、名前だけで曲線/キューブを切り替えられるようにするため。

名前は `"PaperFold"` / `"paper-fold"` / `"paper_fold"` を同一視する（スネークケースに正規化）。
"""

from __future__ import annotations

import re
from typing import Any, Callable

from engine.core.geometry import MeshData

ShapeFn = Callable[..., MeshData]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_shapes: dict[str, ShapeFn] = {}


def _key(name: str) -> str:
    if not isinstance(name, str) or not name:
        raise ValueError(f"shape name must be a non-empty str, got {name!r}")
    return _CAMEL_BOUNDARY.sub("_", name).replace("-", "_").lower()


def shape(arg: ShapeFn | str | None = None, /, name: str | None = None):
    """生成関数を登録するデコレータ（`@shape` / `@shape()` / `@shape("name")`）。

    同名で別の関数を登録すると ValueError、関数以外は TypeError。
    """
    if callable(arg) and name is None:
        return _register(arg, None)
    explicit = arg if isinstance(arg, str) else name
    return lambda fn: _register(fn, explicit)


def _register(fn: Any, name: str | None) -> ShapeFn:
    if not callable(fn) or isinstance(fn, type):
        raise TypeError(f"@shape expects a function, got {fn!r}")
    key = _key(name or fn.__name__)
    current = _shapes.get(key)
    if current is not None and current is not fn:
        raise ValueError(f"shape '{key}' is already registered")
    _shapes[key] = fn
    return fn


def get_shape(name: str) -> ShapeFn:
    try:
        return _shapes[_key(name)]
    except KeyError:
        raise KeyError(f"unknown shape: '{name}' (known: {', '.join(list_shapes())})") from None


def generate(name: str, **params: Any) -> MeshData:
    """名前で解決した生成関数を呼び、`MeshData` であることを確認して返す。"""
    out = get_shape(name)(**params)
    if not isinstance(out, MeshData):
        raise TypeError(f"shape '{name}' must return MeshData, got {type(out)!r}")
    return out


def list_shapes() -> list[str]:
    return sorted(_shapes)


def is_shape_registered(name: str) -> bool:
    return _key(name) in _shapes


def unregister(name: str) -> None:
    """登録を解除する（未登録なら何もしない）。"""
    _shapes.pop(_key(name), None)


__all__ = [
    "shape",
    "get_shape",
    "generate",
    "list_shapes",
    "is_shape_registered",
    "unregister",
]
