"""アプリケーションライフサイクル管理"""

import contextlib
from datetime import datetime, timezone
from typing import AsyncIterator

from fastapi import FastAPI

from .config import ServerConfig
from .logging import get_logger

logger = get_logger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    アプリケーションのライフサイクル管理

    起動時:
    - 起動時刻の記録
    - 配信設定のログ出力
    - 静的ファイルディレクトリ・インデックスファイルの存在確認（警告のみ）

    Args:
        app: FastAPIアプリケーションインスタンス

    Yields:
        None
    """
    config: ServerConfig = app.state.config
    app.state.start_time = datetime.now(timezone.utc)

    logger.info(f"Serving dir: {config.static_dir}")
    logger.info(f"Route mode: {config.route_mode.value}")
    logger.info(
        f"Listening on addr: {config.listen_address}"
        + (" (TLS)" if config.use_tls else "")
    )

    index_path = config.static_dir / config.index_file
    if not config.static_dir.is_dir():
        logger.warning(f"Static directory not found: {config.static_dir}")
    elif not index_path.is_file():
        logger.warning(f"Index file not found: {index_path}")

    yield

    logger.info("Shutting down")
