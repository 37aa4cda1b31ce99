"""監視ツール（Sentry）の初期化"""

from typing import Optional

import sentry_sdk

from .config import Settings, get_settings
from .logging import get_logger

logger = get_logger(__name__)


def init_monitoring(settings: Optional[Settings] = None) -> bool:
    """
    Sentryの初期化

    SENTRY_DSNが設定されていない場合はスキップされる

    Returns:
        Sentryを有効化した場合True
    """
    settings = settings or get_settings()

    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        )
        logger.info("Sentry is enabled")
        return True

    logger.info("Sentry DSN is not set")
    return False
