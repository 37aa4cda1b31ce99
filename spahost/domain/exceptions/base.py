"""
ドメイン層の例外クラス

サーバーの起動・設定で発生するエラーを表現する純粋なPython例外。
フレームワークに依存しない。
"""

from typing import Any, Optional


class DomainError(Exception):
    """
    ドメイン層のベース例外

    Attributes:
        message: エラーメッセージ
        code: エラーコード（識別子）
        details: エラーの詳細情報（オプション）
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: Optional[dict[str, Any] | list[dict[str, Any]]] = None,
    ) -> None:
        """
        Args:
            message: エラーメッセージ
            code: エラーコード
            details: エラーの詳細情報（オプション）
        """
        self.message = message
        self.code = code
        self.details = details
        super().__init__(message)


class ConfigurationError(DomainError):
    """
    設定エラー

    キャッシュ期間のパース失敗やTLS設定の片側指定など。
    起動時にのみ発生し、リクエスト処理中には発生しない。
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        details: Optional[dict[str, Any] | list[dict[str, Any]]] = None,
    ) -> None:
        """
        Args:
            message: エラーメッセージ
            details: エラーの詳細情報（オプション）
                    pydanticのバリデーションエラー一覧を含められる
        """
        super().__init__(message=message, code="configuration_error", details=details)


class ListenerError(DomainError):
    """リスニングソケットのbind/listen失敗"""

    def __init__(
        self,
        message: str = "Failed to start listener",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Args:
            message: エラーメッセージ
            details: エラーの詳細情報（オプション）
        """
        super().__init__(message=message, code="listener_error", details=details)
