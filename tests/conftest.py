"""共通フィクスチャ。

- 乱数シード固定
- 小さな MeshData 試料
- ヘッドレスエンジン
"""

from __future__ import annotations

import numpy as np
import pytest

from api.app import AppConfig
from engine.core.geometry import MeshData
from engine.render.backend import HeadlessEngine


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture()
def mesh_empty() -> MeshData:
    return MeshData.empty()


@pytest.fixture()
def mesh_segment() -> MeshData:
    pos = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]], dtype=np.float32)
    col = np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]], dtype=np.float32)
    return MeshData(pos, col, [0, 1])


@pytest.fixture()
def headless_engine() -> HeadlessEngine:
    return HeadlessEngine()


@pytest.fixture()
def small_config() -> AppConfig:
    return AppConfig(depth=6, time_step=0.25)
