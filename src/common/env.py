"""
どこで: `common.env`
何を: `PFD_*` 環境変数を型付きで読むヘルパと、設定値共通の真偽パーサ `parse_bool`。
なぜ: 不正値は既定値へ落とす（フェイルソフト）規則を、環境変数と YAML で揃えるため。
"""

from __future__ import annotations

import os

_TRUE = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSE = frozenset({"0", "false", "f", "no", "n", "off"})


def parse_bool(value: object, default: bool = False) -> bool:
    """文字列/数値/真偽値を bool にする。解釈できない文字列は `default`。

    `"false"` や `"0"` を True にしないよう、`bool(str)` ではなくこちらを使う。
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        s = value.strip().lower()
        if s in _TRUE:
            return True
        if s in _FALSE:
            return False
        if s.lstrip("-").isdigit():
            return int(s) != 0
    return bool(default)


def _lookup(name: str) -> str | None:
    # 未設定と空白のみは同じ扱い
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def env_int(name: str, default: int | None = None, *, min_value: int | None = None) -> int | None:
    """整数環境変数。未設定/不正値は `default`、`min_value` 未満は `min_value` に丸める。"""
    raw = _lookup(name)
    if raw is None:
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    return val if min_value is None else max(val, min_value)


def env_bool(name: str, default: bool = False) -> bool:
    raw = _lookup(name)
    return bool(default) if raw is None else parse_bool(raw, default)


def env_str(name: str, default: str) -> str:
    raw = _lookup(name)
    return default if raw is None else raw


__all__ = ["parse_bool", "env_int", "env_bool", "env_str"]
