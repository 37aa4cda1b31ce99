"""ロギングユーティリティ"""

import copy
import logging
from typing import Any

from uvicorn.config import LOGGING_CONFIG

LOGGER_NAMESPACE = "spahost"
REQUEST_LOGGER_NAME = f"{LOGGER_NAMESPACE}.requests"


def get_logger(name: str) -> logging.Logger:
    """
    ロガーインスタンスを取得する。

    "spahost"配下のロガーを返す。uvicorn起動時にbuild_log_config()の設定が適用され、
    サーバーのログと同じフォーマット・出力先で出力される。

    Args:
        name: ロガー名、通常は呼び出し元モジュールの__name__を指定。

    Returns:
        logging.Logger: ロガーインスタンス。

    Examples:
        >>> get_logger("spahost.core.lifespan").name
        'spahost.core.lifespan'
        >>> get_logger("scripts.deploy").name
        'spahost.scripts.deploy'
    """
    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def get_request_logger() -> logging.Logger:
    """リクエストログ（REQ行）の出力先"""
    return get_logger(REQUEST_LOGGER_NAME)


def build_log_config(level: str = "INFO") -> dict[str, Any]:
    """
    uvicornに渡すログ設定

    uvicornのデフォルト設定に"spahost"ロガーを追加する。
    """
    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config["loggers"][LOGGER_NAMESPACE] = {
        "handlers": ["default"],
        "level": level,
        "propagate": False,
    }
    return log_config
