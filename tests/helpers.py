"""テスト用ヘルパー"""

from typing import Any

INDEX_HTML = "<!doctype html><html><body><div id=app></div></body></html>"
TEST_JS = "console.log('test');"
STYLE_CSS = "body { margin: 0; }"
DOCS_INDEX_HTML = "<html><body>docs</body></html>"


class RecordingLogger:
    """
    受け取ったログを(level, message)で記録するロガー

    printf形式の引数はメッセージに展開して記録する。
    """

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def _record(self, level: str, msg: Any, *args: Any) -> None:
        self.records.append((level, str(msg) % args if args else str(msg)))

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self._record("info", msg, *args)

    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self._record("warning", msg, *args)

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self._record("error", msg, *args)

    def fatal(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self._record("fatal", msg, *args)

    def messages(self, level: str) -> list[str]:
        """指定レベルのメッセージ一覧"""
        return [message for lvl, message in self.records if lvl == level]
