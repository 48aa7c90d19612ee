"""
どこで: `api.runner`（実行ランナー / CLI 入口）。
何を: `App` を描画バックエンドに結線し、フレームループで `next_frame` → `draw` を駆動する。
なぜ: アプリ側は「起動時登録」と「毎フレーム packet を返す」だけを書けばよいようにするため。

実行モード:
- ウィンドウ（既定）: `pyglet` ウィンドウ + `ModernGL` の `GLEngine`。`AppDriver.tick` を
  `pyglet.clock.schedule_interval` で呼び、`on_draw` で直近 packet を描画する。`ESC` で終了。
- ヘッドレス: `HeadlessEngine` に対して固定フレーム数だけ回し、集計をログに出す。
  CLI では「引数が 1 つでもあれば」こちらを選ぶ（引数の内容は見ない）。

設定:
- `util.utils.load_config()`（YAML）の `app` / `window` / `headless` セクション。
- 環境変数 `PFD_HEADLESS_FRAMES` がフレーム数を上書きする（`common.settings`）。

ロギング:
- 起動失敗（`PaperFoldError`）は `main()` が `logger.exception` で記録し、終了コード 1 を返す。
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Mapping, Sequence

from common.errors import PaperFoldError
from common.logging import setup_default_logging
from common.settings import get as get_settings
from engine.render.backend import Engine, HeadlessEngine
from engine.runtime.packet import FramePacket
from util.color import normalize_color
from util.utils import config_section, load_config

from .app import App, AppConfig, PaperFoldApp

logger = logging.getLogger(__name__)

DEFAULT_HEADLESS_FRAMES = 120


class AppDriver:
    """`App` を pyglet の `tick(dt)` 形式に合わせて包み、tick ごとに packet を 1 つ作る。"""

    def __init__(self, app: App, engine: Engine) -> None:
        self.app = app
        self.engine = engine
        self.latest: FramePacket | None = None
        self.frames = 0

    def tick(self, dt: float) -> None:
        # dt は使わない（アニメーション時刻は論理時計）
        self.latest = self.app.next_frame(self.engine)
        self.frames += 1

    def draw(self) -> None:
        if self.latest is not None:
            self.engine.draw(self.latest)


def resolve_headless_frames(cfg: Mapping[str, Any]) -> int:
    """ヘッドレス実行のフレーム数（環境変数 > 設定ファイル > 既定）。"""
    env_frames = get_settings().HEADLESS_FRAMES
    if env_frames is not None:
        return int(env_frames)
    raw = config_section(dict(cfg), "headless").get("frames", DEFAULT_HEADLESS_FRAMES)
    try:
        return max(0, int(raw))
    except (TypeError, ValueError):
        logger.warning("invalid headless.frames=%r; using %d", raw, DEFAULT_HEADLESS_FRAMES)
        return DEFAULT_HEADLESS_FRAMES


def run_headless(
    app_cls: type[PaperFoldApp], config: AppConfig, frames: int
) -> HeadlessEngine:
    """GPU なしで `frames` 回ぶん駆動し、使用したエンジンを返す。"""
    engine = HeadlessEngine()
    driver = AppDriver(app_cls.create(engine, config), engine)
    for _ in range(frames):
        driver.tick(0.0)
        driver.draw()
    logger.info(
        "%s headless: frames=%d objects=%d last_t=%s",
        app_cls.NAME,
        engine.frames_drawn,
        engine.objects_drawn,
        engine.time_value,
    )
    return engine


def run_window(
    app_cls: type[PaperFoldApp], config: AppConfig, window_cfg: Mapping[str, Any]
) -> None:
    """pyglet ウィンドウを開いてイベントループを回す（閉じるまで戻らない）。"""
    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import moderngl
    import pyglet

    from engine.core import transform_utils as tf
    from engine.core.render_window import RenderWindow
    from engine.render.renderer import GLEngine

    width = int(window_cfg.get("width", 1280))
    height = int(window_cfg.get("height", 720))
    fps = max(1, int(window_cfg.get("fps", 60)))
    bg = normalize_color(window_cfg.get("background_color", (0.0, 0.0, 0.0, 1.0)))

    if get_settings().GL_DEBUG:
        # フレームごとの描画ログを出す
        logging.getLogger("engine.render").setLevel(logging.DEBUG)

    window = RenderWindow(width, height, bg_color=bg, caption=app_cls.NAME)
    ctx = moderngl.create_context()
    ctx.enable(moderngl.BLEND)
    ctx.blend_func = (moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA)

    view = tf.look_at((0.0, 2.0, 4.0))

    def _projection() -> Any:
        return tf.perspective(1.0, window.aspect, 0.01, 1000.0)

    engine = GLEngine(ctx, view=view, projection=_projection(), pulse=0.0)
    try:
        driver = AppDriver(app_cls.create(engine, config), engine)
    except PaperFoldError:
        engine.release()
        window.close()
        raise
    window.add_draw_callback(driver.draw)

    @window.event
    def on_resize(w: int, h: int) -> None:
        fb_w, fb_h = window.get_framebuffer_size()
        ctx.viewport = (0, 0, fb_w, fb_h)
        engine.set_camera(view, _projection())

    @window.event
    def on_close() -> None:
        pyglet.clock.unschedule(driver.tick)
        engine.release()
        logger.info("%s closed after %d frames", app_cls.NAME, driver.frames)

    pyglet.clock.schedule_interval(driver.tick, 1.0 / fps)
    pyglet.app.run()


def launch(
    app_cls: type[PaperFoldApp] = PaperFoldApp,
    *,
    headless: bool = False,
    config: Mapping[str, Any] | None = None,
) -> HeadlessEngine | None:
    """設定を解決してアプリを起動する。

    Parameters
    ----------
    app_cls : type[PaperFoldApp]
        `create(engine, config)` と `next_frame(engine)` を持つアプリクラス。
    headless : bool, default False
        True で `HeadlessEngine` に対して固定フレーム数だけ実行する。
    config : Mapping | None
        設定辞書。None で `load_config()` から読む。

    Returns
    -------
    HeadlessEngine | None
        ヘッドレス時は使用したエンジン（集計参照用）、ウィンドウ時は None。

    Raises
    ------
    PaperFoldError
        起動時のマテリアル/メッシュ登録失敗（再試行しない）。
    """
    cfg = dict(config) if config is not None else load_config()
    app_config = AppConfig.from_mapping(config_section(cfg, "app"))
    if headless:
        return run_headless(app_cls, app_config, resolve_headless_frames(cfg))
    run_window(app_cls, app_config, config_section(cfg, "window"))
    return None


def main(argv: Sequence[str] | None = None) -> int:
    """CLI 入口。引数が 1 つでもあればヘッドレス実行。"""
    setup_default_logging()
    args = sys.argv[1:] if argv is None else list(argv)
    headless = len(args) > 0
    try:
        launch(PaperFoldApp, headless=headless)
    except (PaperFoldError, ValueError):
        logger.exception("startup failed")
        return 1
    return 0


__all__ = ["AppDriver", "launch", "main", "resolve_headless_frames", "run_headless"]
