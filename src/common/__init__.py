"""
どこで: `common` パッケージ。
何を: 例外階層・環境変数/設定・ロギングなどの軽量ユーティリティ。
なぜ: shapes/engine/api から共通に参照する基盤を分離し、依存の向きを単純化するため。
"""

from .errors import CompilationError, PaperFoldError, ValidationError

__all__ = [
    "PaperFoldError",
    "CompilationError",
    "ValidationError",
]
