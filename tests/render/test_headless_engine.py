from __future__ import annotations

import numpy as np
import pytest

from common.errors import CompilationError, ValidationError
from engine.core.geometry import MeshData
from engine.render.backend import Engine, HeadlessEngine, check_shader_source
from engine.render.shader import UNLIT_FRAG, UNLIT_VERT
from engine.render.types import DrawMode, MaterialHandle, MeshHandle
from engine.runtime.packet import FramePacket, RenderObject


def test_headless_engine_satisfies_protocol(headless_engine: HeadlessEngine) -> None:
    assert isinstance(headless_engine, Engine)


def test_register_material_accepts_bundled_unlit(headless_engine: HeadlessEngine) -> None:
    h = headless_engine.register_material(UNLIT_VERT, UNLIT_FRAG, DrawMode.LINES)
    assert isinstance(h, MaterialHandle)
    assert headless_engine.materials[h] is DrawMode.LINES


def test_register_material_accepts_bytes(headless_engine: HeadlessEngine) -> None:
    h = headless_engine.register_material(
        UNLIT_VERT.encode("utf-8"), UNLIT_FRAG.encode("utf-8"), DrawMode.TRIANGLES
    )
    assert headless_engine.materials[h] is DrawMode.TRIANGLES


@pytest.mark.parametrize(
    "src",
    [
        "void main() {}",  # #version 無し
        "#version 330 core\nvoid mian() {}",  # main 無し
        b"\xff\xfe\x00",  # UTF-8 として読めない
    ],
)
def test_invalid_shader_raises_compilation_error(src: str | bytes) -> None:
    with pytest.raises(CompilationError):
        check_shader_source("vertex", src)


def test_register_mesh_and_draw_counts(
    headless_engine: HeadlessEngine, mesh_segment: MeshData
) -> None:
    mat = headless_engine.register_material(UNLIT_VERT, UNLIT_FRAG, DrawMode.LINES)
    mesh = headless_engine.register_mesh(mesh_segment)
    assert isinstance(mesh, MeshHandle)

    packet = FramePacket(objects=(RenderObject(mesh, mat, np.eye(4)),) * 2, frame_id=3)
    headless_engine.draw(packet)
    assert headless_engine.frames_drawn == 1
    assert headless_engine.objects_drawn == 2
    assert headless_engine.last_packet is packet


def test_handles_are_unique(headless_engine: HeadlessEngine, mesh_segment: MeshData) -> None:
    a = headless_engine.register_mesh(mesh_segment)
    b = headless_engine.register_mesh(mesh_segment)
    assert a != b


def test_register_mesh_rejects_non_mesh(headless_engine: HeadlessEngine) -> None:
    with pytest.raises(ValidationError):
        headless_engine.register_mesh(([0.0, 0.0, 0.0], [0]))  # type: ignore[arg-type]


def test_draw_unknown_handle_raises(headless_engine: HeadlessEngine) -> None:
    packet = FramePacket(objects=(RenderObject(MeshHandle(99), MaterialHandle(98), np.eye(4)),))
    with pytest.raises(ValidationError):
        headless_engine.draw(packet)


def test_set_time_uniform_records_value(headless_engine: HeadlessEngine) -> None:
    assert headless_engine.time_value is None
    headless_engine.set_time_uniform(0.5)
    assert headless_engine.time_value == 0.5
