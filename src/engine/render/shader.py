"""
どこで: `engine.render` のシェーダソース。
何を: 頂点色をそのまま出力する unlit シェーダ（GLSL 330 core）と、その読み込みヘルパ。
なぜ: 線（paper_fold）と三角形（rainbow_cube）の両方を 1 組のプログラムで描くため。

uniform:
- `mvp` (mat4): projection @ view @ model。
- `time` (float): アニメーション時刻。明滅に使う（`pulse` が 0 なら影響なし）。
- `pulse` (float): 明滅の強さ 0–1。
"""

from __future__ import annotations

UNLIT_VERT = """
#version 330 core

uniform mat4 mvp;

in vec3 in_pos;
in vec3 in_color;

out vec3 v_color;

void main() {
    gl_Position = mvp * vec4(in_pos, 1.0);
    v_color = in_color;
}
"""

UNLIT_FRAG = """
#version 330 core

uniform float time;
uniform float pulse;

in vec3 v_color;

out vec4 f_color;

void main() {
    float k = 1.0 - pulse * 0.5 * (1.0 - cos(6.2831853 * time));
    f_color = vec4(v_color * k, 1.0);
}
"""


def as_source(src: str | bytes) -> str:
    """bytes/str のシェーダソースを str に揃える（UTF-8 として解釈）。"""
    if isinstance(src, bytes):
        return src.decode("utf-8")
    if isinstance(src, str):
        return src
    raise TypeError(f"shader source must be str or bytes, got {type(src)!r}")


__all__ = ["UNLIT_VERT", "UNLIT_FRAG", "as_source"]
