"""
どこで: `engine.core` のフレーム時間管理。
何を: 論理時間 `AnimationClock`（固定刻み・任意の剰余ラップ）。
なぜ: アニメーション時刻を実時間（pyglet の dt）から切り離し、フレーム数だけで決まるようにするため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class AnimationClock:
    """1 tick ごとに `step` だけ進む論理時計（不変）。

    - `wrap` を指定すると `value` は `[0, wrap)` に畳み込まれる。
    - 実時間（dt）には依存しない。
    """

    value: float = 0.0
    step: float = 0.01
    wrap: float | None = None

    def __post_init__(self) -> None:
        if not math.isfinite(self.step) or self.step <= 0.0:
            raise ValueError(f"step must be a positive finite number, got {self.step}")
        if self.wrap is not None and (not math.isfinite(self.wrap) or self.wrap <= 0.0):
            raise ValueError(f"wrap must be a positive finite number or None, got {self.wrap}")

    def advanced(self) -> "AnimationClock":
        """1 刻み進めた新しい時計を返す。"""
        nxt = self.value + self.step
        if self.wrap is not None:
            nxt = math.fmod(nxt, self.wrap)
        return replace(self, value=nxt)


__all__ = ["AnimationClock"]
