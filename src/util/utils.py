"""
どこで: `util.utils`。
何を: YAML 設定の読込 `load_config()` とセクション取り出し `config_section()`。
なぜ: 既定値（configs/default.yaml）と利用者の上書き（ルートの config.yaml）を 1 つの辞書にまとめるため。
"""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

# 後ろほど優先（トップレベルキー単位で上書き）
CONFIG_FILES = ("configs/default.yaml", "config.yaml")
_ROOT_MARKERS = ("pyproject.toml", ".git", "configs")


def _read_mapping(path: Path) -> Dict[str, Any]:
    """YAML を読み、トップレベルが辞書でなければ空辞書。読めない場合は警告して空辞書。"""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        logger.warning("設定ファイルを読み込めませんでした: %s", path, exc_info=True)
        return {}
    if data is not None and not isinstance(data, dict):
        logger.warning("設定ファイルのトップレベルが辞書ではありません: %s", path)
        return {}
    return data or {}


def project_root(start: Path | None = None) -> Path:
    """`start`（既定: このファイル）から上へたどり、目印を持つ最初のディレクトリを返す。"""
    here = (start or Path(__file__)).resolve()
    for candidate in (here, *here.parents):
        if any((candidate / marker).exists() for marker in _ROOT_MARKERS):
            return candidate
    # <root>/src/util/utils.py を想定
    return Path(__file__).resolve().parents[2]


def load_config(root: Path | None = None) -> Dict[str, Any]:
    """`CONFIG_FILES` を順に読み、トップレベルで上書きマージした辞書を返す（ディープマージなし）。"""
    base = root if root is not None else project_root()
    merged: Dict[str, Any] = {}
    for rel in CONFIG_FILES:
        path = base / rel
        if path.is_file():
            merged.update(_read_mapping(path))
    return merged


def config_section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    """`cfg[name]` が辞書ならそれを、そうでなければ空辞書を返す。"""
    section = cfg.get(name) if isinstance(cfg, dict) else None
    return section if isinstance(section, dict) else {}
