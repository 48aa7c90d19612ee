from __future__ import annotations

import numpy as np
import pytest

from engine.render.types import MaterialHandle, MeshHandle
from engine.runtime.packet import FramePacket, RenderObject


def test_render_object_freezes_transform_copy() -> None:
    m = np.eye(4)
    obj = RenderObject(MeshHandle(1), MaterialHandle(2), m)
    assert obj.transform.dtype == np.float32
    m[0, 0] = 9.0
    assert obj.transform[0, 0] == 1.0
    with pytest.raises(ValueError):
        obj.transform[0, 0] = 2.0


def test_render_object_rejects_bad_shape() -> None:
    with pytest.raises(ValueError):
        RenderObject(MeshHandle(1), MaterialHandle(2), np.eye(3))


def test_packet_equality_and_len() -> None:
    a = RenderObject(MeshHandle(1), MaterialHandle(2), np.eye(4))
    b = RenderObject(MeshHandle(1), MaterialHandle(2), np.eye(4))
    assert a == b
    p = FramePacket(objects=(a, b), frame_id=7)
    assert len(p) == 2
    assert p == FramePacket(objects=(b, a), frame_id=7)
