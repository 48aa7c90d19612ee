"""
どこで: `api.app`（フレームドライバ）。
何を: アプリ契約 `App`、純粋な状態遷移 `advance()`、デモアプリ `PaperFoldApp` を提供。
なぜ: 毎フレームの「時刻 → 変換 → 描画要求」を閉包や共有可変参照に頼らず関数として切り出し、
      エンジン無しで単体検証できるようにするため。

1 tick の流れ:
1) 時刻から変換行列を計算する（`frame_transform`）。
   `scale = base_scale * 2 ** (t * growth_rate)`、`spin_rate` が 0 でなければ Y 軸回転を合成。
2) 登録済み (mesh, material) ごとに `RenderObject` を 1 件ずつ、登録順に組み立てる。
3) 現在時刻をエンジンへ通知する（`set_time_uniform`、packet とは独立）。
4) 時計を 1 刻み進める（`wrap` 指定時は剰余で畳む）。
5) `FramePacket` を返す。

例:
    engine = HeadlessEngine()
    app = PaperFoldApp.create(engine, AppConfig(depth=20))
    packet = app.next_frame(engine)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Mapping, Protocol, Sequence

import numpy as np

from common.env import parse_bool
from common.types import RGB
from engine.core import transform_utils as tf
from engine.core.frame_clock import AnimationClock
from engine.render.backend import Engine
from engine.render.shader import UNLIT_FRAG, UNLIT_VERT
from engine.render.types import DrawMode, MaterialHandle, MeshHandle
from engine.runtime.packet import FramePacket, RenderObject
from shapes.registry import generate
from util.color import normalize_rgb

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppConfig:
    """`PaperFoldApp` の設定（`configs/default.yaml` の `app` セクションに対応）。"""

    depth: int = 50
    color: RGB = (0.0, 0.3, 1.0)
    base_scale: float = 0.001
    growth_rate: float = 0.0
    spin_rate: float = 0.0
    time_step: float = 0.01
    time_wrap: float | None = None
    show_cube: bool = False
    cube_size: float = 0.25

    def __post_init__(self) -> None:
        if not math.isfinite(self.base_scale) or self.base_scale <= 0.0:
            raise ValueError(f"base_scale must be > 0, got {self.base_scale}")
        if self.cube_size <= 0.0:
            raise ValueError(f"cube_size must be > 0, got {self.cube_size}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "AppConfig":
        """辞書（YAML セクション）から生成する。未知キーは警告して無視。"""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("unknown app config keys ignored: %s", ", ".join(unknown))
        kwargs: dict[str, Any] = {k: data[k] for k in known if k in data}
        if "color" in kwargs:
            kwargs["color"] = normalize_rgb(kwargs["color"])
        if kwargs.get("time_wrap") is not None:
            kwargs["time_wrap"] = float(kwargs["time_wrap"])
        for name in ("base_scale", "growth_rate", "spin_rate", "time_step", "cube_size"):
            if name in kwargs:
                kwargs[name] = float(kwargs[name])
        if "depth" in kwargs:
            kwargs["depth"] = int(kwargs["depth"])
        if "show_cube" in kwargs:
            kwargs["show_cube"] = parse_bool(kwargs["show_cube"])
        return cls(**kwargs)


@dataclass(frozen=True)
class Binding:
    """毎フレーム 1 件の `RenderObject` になる (mesh, material) の組と、固定のローカル変換。"""

    mesh: MeshHandle
    material: MaterialHandle
    local: np.ndarray = field(default_factory=tf.identity, repr=False, compare=False)


def frame_transform(
    t: float, *, base_scale: float, growth_rate: float = 0.0, spin_rate: float = 0.0
) -> np.ndarray:
    """時刻 `t` に対するフレーム共通の変換行列（回転 @ 一様スケール）。"""
    s = base_scale * 2.0 ** (t * growth_rate)
    m = tf.scaling(s)
    if spin_rate:
        m = tf.compose(tf.rotation_y(t * spin_rate), m)
    return m


def advance(
    clock: AnimationClock,
    bindings: Sequence[Binding],
    *,
    base_scale: float,
    growth_rate: float = 0.0,
    spin_rate: float = 0.0,
    frame_id: int = 0,
) -> tuple[AnimationClock, FramePacket]:
    """純粋な状態遷移 `(clock, bindings) -> (clock', packet)`。

    時刻の通知（副作用）は呼び出し側が `clock.value` を使って行う。
    """
    m = frame_transform(
        clock.value, base_scale=base_scale, growth_rate=growth_rate, spin_rate=spin_rate
    )
    objects = tuple(
        RenderObject(mesh=b.mesh, material=b.material, transform=tf.compose(m, b.local))
        for b in bindings
    )
    return clock.advanced(), FramePacket(objects=objects, frame_id=frame_id)


class App(Protocol):
    """ランナーから駆動されるアプリの契約。"""

    NAME: ClassVar[str]

    @classmethod
    def create(cls, engine: Engine, config: AppConfig) -> "App":
        """起動時に 1 度だけ呼ばれ、マテリアル/メッシュを登録する。失敗は送出（致命）。"""
        ...

    def next_frame(self, engine: Engine) -> FramePacket:
        """表示フレームごとに呼ばれ、描画要求を返す。"""
        ...


class PaperFoldApp:
    """紙折り曲線（任意で虹色キューブ）を描くデモアプリ。"""

    NAME: ClassVar[str] = "paperfold"

    def __init__(self, bindings: Sequence[Binding], config: AppConfig) -> None:
        self.bindings: tuple[Binding, ...] = tuple(bindings)
        self.config = config
        self.clock = AnimationClock(value=0.0, step=config.time_step, wrap=config.time_wrap)
        self.frame_id = 0

    @classmethod
    def create(cls, engine: Engine, config: AppConfig) -> "PaperFoldApp":
        line_material = engine.register_material(UNLIT_VERT, UNLIT_FRAG, DrawMode.LINES)
        curve = generate("paper_fold", depth=config.depth, color=config.color)
        curve_mesh = engine.register_mesh(curve)
        bindings = [Binding(curve_mesh, line_material)]
        logger.info("paper_fold registered: depth=%d verts=%d", config.depth, curve.n_vertices)

        if config.show_cube:
            tri_material = engine.register_material(UNLIT_VERT, UNLIT_FRAG, DrawMode.TRIANGLES)
            cube_mesh = engine.register_mesh(generate("rainbow_cube"))
            # フレーム共通スケールを打ち消して一辺 cube_size 相当にする
            local = tf.scaling(config.cube_size / config.base_scale)
            bindings.append(Binding(cube_mesh, tri_material, local))
            logger.info("rainbow_cube registered")
        return cls(bindings, config)

    def next_frame(self, engine: Engine) -> FramePacket:
        cfg = self.config
        # 時刻の通知が先（失敗時は時計も frame_id も進めない）
        engine.set_time_uniform(self.clock.value)
        self.clock, packet = advance(
            self.clock,
            self.bindings,
            base_scale=cfg.base_scale,
            growth_rate=cfg.growth_rate,
            spin_rate=cfg.spin_rate,
            frame_id=self.frame_id,
        )
        self.frame_id += 1
        return packet


__all__ = [
    "App",
    "AppConfig",
    "Binding",
    "PaperFoldApp",
    "advance",
    "frame_transform",
]
