"""
どこで: `common.errors`。
何を: プロジェクト共通の例外階層（`PaperFoldError` とその派生）。
なぜ: 起動時の登録失敗（シェーダ/メッシュ）を呼び出し側で一括捕捉できるようにするため。
"""

from __future__ import annotations


class PaperFoldError(Exception):
    """本プロジェクトが送出する例外の基底。"""


class CompilationError(PaperFoldError):
    """シェーダソースのコンパイル/リンクに失敗した。"""


class ValidationError(PaperFoldError, ValueError):
    """メッシュデータが不変条件（index 範囲・16bit 予算など）を満たさない。"""


__all__ = ["PaperFoldError", "CompilationError", "ValidationError"]
