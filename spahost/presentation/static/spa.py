"""SPA対応の静的ファイルサーバー"""

import os
from datetime import timedelta
from pathlib import Path
from typing import Any, Iterable, MutableMapping, Optional

from fastapi import Response
from fastapi.responses import FileResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.staticfiles import NotModifiedResponse
from starlette.types import Message, Receive, Scope, Send

from ... import SERVER_NAME, __version__
from ...core.config import ServerConfig
from ...domain.duration import cache_control_value, parse_duration
from ...domain.etag import compute_etag, etag_matches
from ...domain.exceptions.base import ConfigurationError
from ...domain.logger import NULL_LOGGER, RequestLogger
from ...domain.routing import (
    DEFAULT_STATIC_EXTENSIONS,
    RequestOutcome,
    RouteMode,
    build_classifier,
)
from .files import IndexedStaticFiles

SERVER_HEADER = f"{SERVER_NAME}/{__version__}"


async def read_body(response: Response) -> bytes:
    """レスポンスボディ全体を取得する（ファイルレスポンスはファイル内容を読む）"""
    if isinstance(response, FileResponse):
        return await run_in_threadpool(Path(response.path).read_bytes)
    return getattr(response, "body", b"")


def format_client(scope: MutableMapping[str, Any]) -> str:
    client = scope.get("client")
    if not client:
        return "-"
    host, port = client
    return f"{host}:{port}"


class SPAStaticFiles(IndexedStaticFiles):
    """
    SPA対応の静的ファイルサーバー

    静的ファイルと判定されなかったパスにはインデックスファイルを返すことで、
    クライアントサイドルーティング（history mode）をサポートする。

    全てのレスポンスにCache-Control/Serverヘッダーを付与し、
    送信されるステータスが200のレスポンスにのみボディから計算したETagを付与し、
    If-None-Matchはこの値と照合する。
    """

    def __init__(
        self,
        *,
        directory: str | os.PathLike[str],
        index_file: str = "index.html",
        route_mode: RouteMode | str = RouteMode.REGEX,
        cache_duration: timedelta | str = timedelta(hours=720),
        static_extensions: Iterable[str] = DEFAULT_STATIC_EXTENSIONS,
        logger: RequestLogger = NULL_LOGGER,
    ) -> None:
        """
        Args:
            directory: 静的ファイルのルートディレクトリ（存在確認は行わない）
            index_file: ルートからの相対パスで指定するインデックスファイル
            route_mode: 静的ファイル/SPAルートの判定モード
            cache_duration: Cache-Controlのmax-age（"720h"形式の文字列も可）
            static_extensions: REGEXモードで静的ファイルとみなす拡張子
            logger: リクエストログの出力先

        Raises:
            ConfigurationError: cache_durationが不正な場合
        """
        if isinstance(cache_duration, str):
            try:
                cache_duration = parse_duration(cache_duration)
            except ValueError as e:
                raise ConfigurationError(str(e)) from e
        if cache_duration < timedelta(0):
            raise ConfigurationError("cache duration must not be negative")

        super().__init__(directory=directory, index_names=[index_file])
        self.index_file = index_file
        self.route_mode = RouteMode.parse(route_mode)
        self.logger = logger
        self.classifier = build_classifier(
            self.route_mode, Path(directory), static_extensions, logger
        )
        self.cache_header = cache_control_value(cache_duration)

    @classmethod
    def from_config(
        cls, config: ServerConfig, logger: RequestLogger = NULL_LOGGER
    ) -> "SPAStaticFiles":
        return cls(
            directory=config.static_dir,
            index_file=config.index_file,
            route_mode=config.route_mode,
            cache_duration=config.cache_duration,
            static_extensions=config.static_extensions,
            logger=logger,
        )

    async def check_config(self) -> None:
        # ディレクトリが存在しない場合もリクエストは処理する（404またはインデックス）
        if self.directory is not None and not os.path.isdir(self.directory):
            self.logger.warning("static directory %s not found", self.directory)

    async def is_static(self, request_path: str) -> bool:
        if self.classifier.blocking:
            return await run_in_threadpool(self.classifier.is_static, request_path)
        return self.classifier.is_static(request_path)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """
        最終的なステータスコードでETagの付与を判定し、リクエストログを出力する

        FileResponseはRangeリクエストに対して送信時に206を返すため、
        構築時のステータスではなく送信されるステータスを使用する。
        """
        assert scope["type"] == "http"

        if not self.config_checked:
            await self.check_config()
            self.config_checked = True

        response, target, body = await self.dispatch(self.get_path(scope), scope)
        status_code = response.status_code

        async def send_with_final_status(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                if status_code != 200:
                    message["headers"] = [
                        (name, value)
                        for name, value in message.get("headers", [])
                        if name.lower() != b"etag"
                    ]
            await send(message)

        await response(scope, receive, send_with_final_status)

        RequestOutcome(
            remote_addr=format_client(scope),
            path=scope["path"],
            root=self.root,
            target=target,
            status_code=status_code,
            body=body if status_code == 200 else None,
        ).log(self.logger)

    async def get_response(
        self, path: str, scope: MutableMapping[str, Any]
    ) -> Response:
        response, _, _ = await self.dispatch(path, scope)
        return response

    async def dispatch(
        self, path: str, scope: MutableMapping[str, Any]
    ) -> tuple[Response, str, Optional[bytes]]:
        """
        静的ファイルまたはインデックスファイルのレスポンスを生成する

        Returns:
            レスポンス、実際に返したファイル、ETag計算に使用したボディの組
        """
        request_path: str = scope["path"]

        if await self.is_static(request_path):
            response = await self.serve_static(path, scope)
            target = request_path
        else:
            response = await self.serve_index(scope)
            target = "/" + self.index_file.lstrip("/")

        body: Optional[bytes] = None
        if response.status_code == 200:
            body = await read_body(response)
            etag = compute_etag(body)
            response.headers["etag"] = etag
            if_none_match = Headers(scope=scope).get("if-none-match")
            if if_none_match and etag_matches(if_none_match, etag):
                response = NotModifiedResponse(response.headers)
        if response.status_code != 200 and "etag" in response.headers:
            del response.headers["etag"]

        response.headers["cache-control"] = self.cache_header
        response.headers["server"] = SERVER_HEADER

        return response, target, body

    async def serve_static(
        self, path: str, scope: MutableMapping[str, Any]
    ) -> Response:
        """静的ファイルを返す（404等はStaticFilesのステータスをそのまま返す）"""
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as ex:
            return PlainTextResponse(
                str(ex.detail), status_code=ex.status_code, headers=ex.headers
            )
        except OSError as e:
            self.logger.error("serving %s failed: %s", path, e)
            return PlainTextResponse("Not Found", status_code=404)

    async def serve_index(self, scope: MutableMapping[str, Any]) -> Response:
        """インデックスファイルを返す"""
        if scope["method"] not in ("GET", "HEAD"):
            return PlainTextResponse("Method Not Allowed", status_code=405)
        try:
            return await self.send_file(self.index_file, scope)
        except OSError as e:
            self.logger.error("serving index %s failed: %s", self.index_file, e)
            return PlainTextResponse("Not Found", status_code=404)
