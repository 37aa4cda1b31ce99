"""
Domain層例外クラスの単体テスト
"""

from spahost.domain.exceptions.base import (
    ConfigurationError,
    DomainError,
    ListenerError,
)


class TestDomainError:
    """DomainError基底クラスのテスト"""

    def test_domain_error_creation(self) -> None:
        """DomainErrorを作成できること"""
        error = DomainError(
            message="Test error", code="test_error", details={"key": "value"}
        )

        assert error.message == "Test error"
        assert error.code == "test_error"
        assert error.details == {"key": "value"}
        assert str(error) == "Test error"

    def test_domain_error_without_details(self) -> None:
        """詳細情報なしでDomainErrorを作成できること"""
        error = DomainError(message="Test error", code="test_error")

        assert error.details is None


class TestConfigurationError:
    """ConfigurationErrorのテスト"""

    def test_default_message(self) -> None:
        """デフォルトメッセージとエラーコード"""
        error = ConfigurationError()

        assert error.message == "Invalid configuration"
        assert error.code == "configuration_error"
        assert isinstance(error, DomainError)

    def test_list_details(self) -> None:
        """詳細情報にリストを指定できること"""
        details = [{"loc": ("cache_duration",), "msg": "invalid", "type": "value_error"}]
        error = ConfigurationError("bad config", details=details)

        assert error.message == "bad config"
        assert error.details == details


class TestListenerError:
    """ListenerErrorのテスト"""

    def test_listener_error(self) -> None:
        """エラーコードと詳細情報"""
        error = ListenerError("bind failed", details={"address": "localhost:80"})

        assert error.code == "listener_error"
        assert error.details == {"address": "localhost:80"}
        assert isinstance(error, DomainError)
