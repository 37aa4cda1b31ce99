"""エラーハンドリングミドルウェア"""

from collections.abc import Awaitable, Callable

import sentry_sdk
from fastapi import Request, Response
from fastapi.responses import PlainTextResponse

from ... import SERVER_NAME, __version__
from ...core.logging import get_logger

logger = get_logger(__name__)


async def error_response_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """
    配信処理から漏れた例外を500の平文レスポンスに変換する

    静的ファイル配信自体は500を返さないため、ここに到達するのは想定外の例外のみ。
    例外はSentryに送信し、リクエスト行とともにログに記録する。
    500レスポンスにも通常のレスポンスと同じCache-Control/Serverヘッダーを付与する。
    """
    try:
        return await call_next(request)
    except Exception as e:
        sentry_sdk.capture_exception(e)
        logger.error(
            f"{request.method} {request.url.path} failed: {e!r}",
            exc_info=e,
        )

        headers = {"server": f"{SERVER_NAME}/{__version__}"}
        cache_header = getattr(request.app.state, "cache_header", None)
        if isinstance(cache_header, str):
            headers["cache-control"] = cache_header
        return PlainTextResponse(
            "Internal Server Error", status_code=500, headers=headers
        )
