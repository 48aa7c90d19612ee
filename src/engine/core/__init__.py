"""
どこで: `engine.core` サブパッケージ。
何を: MeshData・変換行列・論理時計（AnimationClock）・描画ウィンドウを提供。
なぜ: 生成と描画の基盤を構成し、上位層（api/render）から再利用可能にするため。
"""
