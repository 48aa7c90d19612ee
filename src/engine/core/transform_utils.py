"""
どこで: `engine.core` の変換ユーティリティ。
何を: 4x4 同次変換行列（スケール/回転/平行移動/合成）とカメラ行列を生成する純関数群。
なぜ: フレーム毎の Transform 計算とレンダラの投影計算で同じ規約を共有するため。

規約:
- 行列は row-major の `float32 (4, 4)`。点は列ベクトル `M @ [x, y, z, 1]` として扱う。
- GPU（GLSL の列優先）へ書き込む側で `.T` してから転送する。
- 角度はラジアン、右手系。
"""

from __future__ import annotations

import math

import numpy as np

Matrix4 = np.ndarray


def identity() -> Matrix4:
    return np.eye(4, dtype=np.float32)


def scaling(sx: float, sy: float | None = None, sz: float | None = None) -> Matrix4:
    """スケール行列。`sy/sz` 省略時は等方スケール。"""
    if sy is None:
        sy = sx
    if sz is None:
        sz = sx
    return np.diag([sx, sy, sz, 1.0]).astype(np.float32)


def translation(dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> Matrix4:
    m = identity()
    m[:3, 3] = (dx, dy, dz)
    return m


def rotation_x(angle_rad: float) -> Matrix4:
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    m = identity()
    m[1, 1], m[1, 2] = c, -s
    m[2, 1], m[2, 2] = s, c
    return m


def rotation_y(angle_rad: float) -> Matrix4:
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    m = identity()
    m[0, 0], m[0, 2] = c, s
    m[2, 0], m[2, 2] = -s, c
    return m


def rotation_z(angle_rad: float) -> Matrix4:
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    m = identity()
    m[0, 0], m[0, 1] = c, -s
    m[1, 0], m[1, 1] = s, c
    return m


def from_euler_angles(roll: float, pitch: float, yaw: float) -> Matrix4:
    """オイラー角（X=roll → Y=pitch → Z=yaw の順に適用）から回転行列を作る。"""
    return compose(rotation_z(yaw), rotation_y(pitch), rotation_x(roll))


def compose(*matrices: Matrix4) -> Matrix4:
    """左から順に掛け合わせる（`compose(A, B)` は B を先に適用）。引数なしは単位行列。"""
    out = identity()
    for m in matrices:
        out = out @ np.asarray(m, dtype=np.float32)
    return out.astype(np.float32, copy=False)


def transform_points(m: Matrix4, points: np.ndarray) -> np.ndarray:
    """(N, 3) の点列に同次変換を適用して (N, 3) を返す。"""
    pts = np.asarray(points, dtype=np.float32)
    if pts.size == 0:
        return np.empty((0, 3), dtype=np.float32)
    homo = np.hstack([pts, np.ones((pts.shape[0], 1), dtype=np.float32)])
    out = homo @ np.asarray(m, dtype=np.float32).T
    return out[:, :3] / out[:, 3:4]


def perspective(fovy_rad: float, aspect: float, near: float, far: float) -> Matrix4:
    """OpenGL 準拠の透視投影行列。"""
    if aspect <= 0.0:
        raise ValueError(f"aspect must be > 0, got {aspect}")
    if not (0.0 < near < far):
        raise ValueError(f"require 0 < near < far, got near={near}, far={far}")
    f = 1.0 / math.tan(fovy_rad / 2.0)
    m = np.zeros((4, 4), dtype=np.float32)
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = (far + near) / (near - far)
    m[2, 3] = (2.0 * far * near) / (near - far)
    m[3, 2] = -1.0
    return m


def look_at(
    eye: tuple[float, float, float],
    target: tuple[float, float, float] = (0.0, 0.0, 0.0),
    up: tuple[float, float, float] = (0.0, 1.0, 0.0),
) -> Matrix4:
    """視点 `eye` から `target` を向くビュー行列。"""
    e = np.asarray(eye, dtype=np.float64)
    fwd = np.asarray(target, dtype=np.float64) - e
    fwd /= np.linalg.norm(fwd)
    side = np.cross(fwd, np.asarray(up, dtype=np.float64))
    side /= np.linalg.norm(side)
    true_up = np.cross(side, fwd)
    m = np.eye(4)
    m[0, :3] = side
    m[1, :3] = true_up
    m[2, :3] = -fwd
    m[:3, 3] = -m[:3, :3] @ e
    return m.astype(np.float32)


__all__ = [
    "Matrix4",
    "identity",
    "scaling",
    "translation",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "from_euler_angles",
    "compose",
    "transform_points",
    "perspective",
    "look_at",
]
