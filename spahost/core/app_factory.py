"""FastAPIアプリケーションファクトリー"""

from typing import Any, Optional

from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware

from .. import SERVER_NAME, __version__
from ..domain.duration import cache_control_value
from ..domain.logger import NULL_LOGGER, RequestLogger
from ..presentation.middleware.error_handler import error_response_middleware
from ..presentation.static.spa import SPAStaticFiles
from .config import ServerConfig, load_server_config
from .lifespan import lifespan


def create_app(
    config: Optional[ServerConfig] = None,
    logger: Optional[RequestLogger] = None,
) -> FastAPI:
    """
    FastAPIアプリケーションを生成

    URL空間全体を静的サイトに割り当てるため、ドキュメント系のルートは無効化する。

    Args:
        config: サーバー設定（省略時は環境変数・設定ファイルから読み込む）
        logger: リクエストログの出力先（省略時は出力しない）

    Returns:
        FastAPIアプリケーションインスタンス

    Raises:
        ConfigurationError: 設定値が不正な場合
    """
    if config is None:
        config = load_server_config()

    app_params: dict[str, Any] = {
        "title": SERVER_NAME,
        "description": "SPAフォールバック対応の静的ファイルサーバー",
        "version": __version__,
        "lifespan": lifespan,
        "docs_url": None,
        "redoc_url": None,
        "openapi_url": None,
    }

    app = FastAPI(**app_params)
    app.state.config = config
    app.state.cache_header = cache_control_value(config.cache_duration)

    # gzip圧縮
    if config.compress:
        app.add_middleware(GZipMiddleware)

    # ミドルウェア登録
    app.middleware("http")(error_response_middleware)

    # SPA
    app.mount(
        "/",
        SPAStaticFiles.from_config(config, logger=logger or NULL_LOGGER),
        name="spa",
    )

    return app
