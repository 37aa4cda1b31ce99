"""
リクエストパスの分類

リクエストパスが静的ファイルを指すのか、SPAのルートなのかを判定する。
判定方法はRouteModeごとの戦略オブジェクトとして実装し、サーバー構築時に1つ選択する。
"""

import os
import re
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Protocol

from .logger import NULL_LOGGER, RequestLogger

DEFAULT_STATIC_EXTENSIONS: tuple[str, ...] = (
    "ico",
    "css",
    "js",
    "svg",
    "gif",
    "jpg",
    "jpeg",
    "png",
    "html",
    "htm",
)


class RouteMode(str, Enum):
    """静的ファイル/SPAルートの判定モード"""

    # 拡張子の正規表現で判定（ファイルアクセスなし、デフォルト）
    REGEX = "regex"
    # ファイルシステム上の存在確認で判定（リクエスト毎にstatが走る）
    STAT = "stat"
    # 常に静的ファイルとして扱う（SPAフォールバックなし）
    STATIC = "static"

    @classmethod
    def parse(cls, value: "str | RouteMode | None") -> "RouteMode":
        """
        文字列からRouteModeを取得する

        空文字・None・未知の値はREGEXにフォールバックする。
        """
        if isinstance(value, RouteMode):
            return value
        if not value:
            return cls.REGEX
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.REGEX


class PathClassifier(Protocol):
    """リクエストパスが静的ファイルかどうかを判定する"""

    blocking: bool

    def is_static(self, path: str) -> bool: ...


class AlwaysStaticClassifier:
    """全てのパスを静的ファイルとして扱う"""

    blocking = False

    def is_static(self, path: str) -> bool:
        return True


class RegexClassifier:
    """
    拡張子の許可リストで判定する

    パスはURLとして解釈せず、文字列全体に対してマッチさせる。
    クエリ文字列の除去は呼び出し側の責務。
    """

    blocking = False

    def __init__(self, extensions: Iterable[str] = DEFAULT_STATIC_EXTENSIONS) -> None:
        self.extensions = tuple(extensions)
        alternation = "|".join(re.escape(ext) for ext in self.extensions)
        self.pattern = re.compile(rf".*\.({alternation})")

    def is_static(self, path: str) -> bool:
        if not self.extensions:
            return False
        return self.pattern.fullmatch(path) is not None


class StatClassifier:
    """
    ファイルシステム上の存在確認で判定する

    存在しない場合、およびstatが失敗した場合は静的ファイルではないと判定する。
    失敗はログに記録し、例外は送出しない。
    """

    blocking = True

    def __init__(self, root: Path, logger: RequestLogger = NULL_LOGGER) -> None:
        self.root = Path(root)
        self.logger = logger

    def is_static(self, path: str) -> bool:
        target = os.path.join(self.root, os.path.normpath(path.lstrip("/")))
        try:
            stat_result = os.stat(target)
        except (FileNotFoundError, NotADirectoryError):
            return False
        except (OSError, ValueError) as e:
            self.logger.error("file stat failed: %s", e)
            return False

        return not stat.S_ISDIR(stat_result.st_mode)


def build_classifier(
    mode: RouteMode,
    root: Path,
    extensions: Iterable[str] = DEFAULT_STATIC_EXTENSIONS,
    logger: RequestLogger = NULL_LOGGER,
) -> PathClassifier:
    """
    RouteModeに対応する判定器を生成する

    Args:
        mode: 判定モード
        root: 静的ファイルのルートディレクトリ（STATモードで使用）
        extensions: 静的ファイルとみなす拡張子（REGEXモードで使用）
        logger: stat失敗時のログ出力先

    Returns:
        PathClassifier: 判定器
    """
    if mode is RouteMode.STATIC:
        return AlwaysStaticClassifier()
    if mode is RouteMode.STAT:
        return StatClassifier(root, logger)
    return RegexClassifier(extensions)


@dataclass(frozen=True)
class RequestOutcome:
    """
    1リクエストの処理結果

    ヘッダー付与とリクエストログ出力に使用し、その後は破棄される。

    Attributes:
        remote_addr: クライアントアドレス
        path: リクエストパス
        root: 配信ルートディレクトリ
        target: 実際に返したファイル（静的ファイルパスまたはインデックスファイル）
        status_code: 最終ステータスコード
        body: レスポンスボディ（ステータス200の場合のみ）
    """

    remote_addr: str
    path: str
    root: str
    target: str
    status_code: int
    body: Optional[bytes] = None

    def log(self, logger: RequestLogger) -> None:
        logger.info(
            "REQ [%s] %s -> %s%s [%d]",
            self.remote_addr,
            self.path,
            self.root,
            self.target,
            self.status_code,
        )
