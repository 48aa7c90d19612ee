"""
どこで: `engine.runtime` サブパッケージ。
何を: アプリとバックエンドの間で受け渡すフレーム単位の描画要求（FramePacket）を提供。
なぜ: 生成と描画の責務を分離し、毎フレームの契約を値型で固定するため。
"""

from .packet import FramePacket, RenderObject

__all__ = ["FramePacket", "RenderObject"]
