"""リクエストログ出力用のロガーインターフェース"""

from typing import Any, Protocol


class RequestLogger(Protocol):
    """
    リクエスト処理で使用するロガーのインターフェース

    logging.Loggerはこのプロトコルを満たす。
    """

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None: ...

    def fatal(self, msg: Any, *args: Any, **kwargs: Any) -> None: ...


class NullLogger:
    """
    何も出力しないロガー

    ロガー未指定時のデフォルト。呼び出し側でNoneチェックを不要にする。
    """

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        pass

    def fatal(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        pass


NULL_LOGGER = NullLogger()
