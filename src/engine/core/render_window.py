"""
どこで: `engine.core` の描画ウィンドウ薄ラッパ。
何を: Pyglet Window（MSAA/深度バッファ/背景クリア）と描画コールバック登録を提供。
なぜ: レンダラ層から GUI 依存を切り離し、最小インターフェイスで統一するため。

使用例:
    win = RenderWindow(1280, 720, bg_color=(0, 0, 0, 1))

    def draw_scene():
        engine.draw(packet)

    win.add_draw_callback(draw_scene)
    pyglet.app.run()
"""

from typing import Callable

import pyglet
from pyglet.gl import Config, glClearColor

from common.types import RGBA


class RenderWindow(pyglet.window.Window):
    def __init__(
        self,
        width: int,
        height: int,
        *,
        bg_color: RGBA = (0.0, 0.0, 0.0, 1.0),
        caption: str = "paperfold",
    ):
        """ウィンドウを生成する。

        引数:
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            bg_color: 背景色 RGBA（0.0〜1.0）。
            caption: タイトルバー文字列。
        """
        # 線描画を滑らかにするために MSAA を有効化。キューブ用に深度も確保する
        config = Config(double_buffer=True, depth_size=24, sample_buffers=1, samples=4)
        super().__init__(
            width=width, height=height, caption=caption, config=config, resizable=True, vsync=True
        )
        self._bg_color = bg_color
        self._draw_callbacks: list[Callable[[], None]] = []

    def add_draw_callback(self, func: Callable[[], None]) -> None:
        """
        `on_draw` 中に呼び出す描画関数を登録する。

        - 関数は引数を取らず、副作用で描画を行うこと。
        - 登録順に呼び出される。
        """
        self._draw_callbacks.append(func)

    def on_draw(self):  # Pyglet 既定のイベント名
        r, g, b, a = self._bg_color
        glClearColor(r, g, b, a)
        self.clear()
        for cb in self._draw_callbacks:
            cb()

    @property
    def aspect(self) -> float:
        """現在のフレームバッファ縦横比（高さ 0 のときは 1.0）。"""
        w, h = self.get_framebuffer_size()
        return float(w) / float(h) if h else 1.0

