import os
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    SettingsError,
)

from ..domain.duration import parse_duration
from ..domain.exceptions.base import ConfigurationError
from ..domain.routing import DEFAULT_STATIC_EXTENSIONS, RouteMode

DEFAULT_CONFIG_FILE = "/etc/spahost/config.json"
CONFIG_FILE_ENV = "SPAHOST_CONFIG_FILE"


class Settings(BaseSettings):
    """
    アプリケーション設定

    優先順位（高い順）: 設定ファイル(JSON) > 環境変数 > コマンドライン引数 > デフォルト値
    """

    model_config = SettingsConfigDict(
        env_prefix="SPAHOST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # 未定義のフィールドを無視
    )

    addr: str = "localhost:80"
    cache_duration: str = "720h"
    compress: bool = False
    static_dir: str = "web"
    index_file: str = "index.html"
    route_mode: str = ""

    static_extensions: str | list[str] = list(DEFAULT_STATIC_EXTENSIONS)

    @field_validator("static_extensions")
    @classmethod
    def assemble_static_extensions(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        return v

    cert_file: str = ""
    key_file: str = ""

    SENTRY_DSN: Optional[str] = None
    SENTRY_TRACES_SAMPLE_RATE: float = 1.0

    @field_validator("SENTRY_DSN")
    @classmethod
    def sentry_dsn_can_be_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == "":
            return None
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        json_file = os.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE)
        return (
            JsonConfigSettingsSource(settings_cls, json_file=json_file),
            env_settings,
            dotenv_settings,
            init_settings,
            file_secret_settings,
        )


def split_address(address: str) -> tuple[str, int]:
    """
    "host:port" 形式のアドレスを分解する

    ":8080" のようにホストを省略した場合は全インターフェースを表す空文字を返す。
    IPv6アドレスは "[::1]:8080" のように角括弧で囲む。
    """
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"invalid listen address: {address!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    port_number = int(port)
    if port_number > 65535:
        raise ValueError(f"port out of range: {address!r}")
    return host, port_number


class ServerConfig(BaseModel):
    """
    サーバー設定

    起動時に一度だけ構築され、以降は変更されない。
    """

    model_config = ConfigDict(frozen=True)

    listen_address: str = "localhost:80"
    cache_duration: timedelta = timedelta(hours=720)
    compress: bool = False
    static_dir: Path = Path("web")
    index_file: str = "index.html"
    route_mode: RouteMode = RouteMode.REGEX
    static_extensions: tuple[str, ...] = DEFAULT_STATIC_EXTENSIONS
    cert_file: Optional[Path] = None
    key_file: Optional[Path] = None

    @field_validator("listen_address")
    @classmethod
    def validate_listen_address(cls, v: str) -> str:
        split_address(v)
        return v

    @field_validator("cache_duration", mode="before")
    @classmethod
    def parse_cache_duration(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_duration(v)
        return v

    @field_validator("cache_duration")
    @classmethod
    def validate_cache_duration(cls, v: timedelta) -> timedelta:
        if v < timedelta(0):
            raise ValueError("cache duration must not be negative")
        return v

    @field_validator("route_mode", mode="before")
    @classmethod
    def parse_route_mode(cls, v: Any) -> RouteMode:
        return RouteMode.parse(v)

    @field_validator("static_extensions", mode="before")
    @classmethod
    def normalize_static_extensions(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple)):
            return tuple(str(ext).strip().lstrip(".") for ext in v if str(ext).strip())
        return v

    @field_validator("cert_file", "key_file", mode="before")
    @classmethod
    def blank_path_is_unset(cls, v: Any) -> Any:
        if v == "":
            return None
        return v

    @model_validator(mode="after")
    def validate_tls_pair(self) -> "ServerConfig":
        if (self.cert_file is None) != (self.key_file is None):
            raise ValueError("cert_file and key_file must be set together to enable TLS")
        return self

    @property
    def host(self) -> str:
        return split_address(self.listen_address)[0]

    @property
    def port(self) -> int:
        return split_address(self.listen_address)[1]

    @property
    def use_tls(self) -> bool:
        """TLS有効判定（証明書と鍵の両方が設定されている場合のみ）"""
        return self.cert_file is not None and self.key_file is not None


@lru_cache
def get_settings() -> Settings:
    """
    アプリケーション設定を取得（キャッシュ）
    """
    return Settings()


def _error_details(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": err["loc"], "msg": err["msg"], "type": err["type"]}
        for err in exc.errors()
    ]


def _error_message(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "Invalid configuration: " + "; ".join(parts)


def _read_settings(overrides: Optional[dict[str, Any]]) -> Settings:
    """
    各層から設定を読み込む

    設定ファイルの読み込み・JSONのパースに失敗した場合もConfigurationErrorにする。
    """
    try:
        return Settings(**overrides) if overrides else get_settings()
    except ValidationError as e:
        raise ConfigurationError(
            message=_error_message(e), details=_error_details(e)
        ) from e
    except (SettingsError, ValueError, OSError) as e:
        raise ConfigurationError(
            message=f"Invalid configuration: failed reading settings: {e}",
            details={"config_file": os.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE)},
        ) from e


def load_server_config(
    settings: Optional[Settings] = None,
    overrides: Optional[dict[str, Any]] = None,
) -> ServerConfig:
    """
    設定からServerConfigを構築する

    Args:
        settings: 設定（省略時はget_settings()）
        overrides: コマンドライン引数で指定された値（settings省略時のみ使用）

    Returns:
        ServerConfig: 検証済みのサーバー設定

    Raises:
        ConfigurationError: 設定値が不正な場合、または設定ファイルを読み込めない場合
    """
    if settings is None:
        settings = _read_settings(overrides)

    try:
        return ServerConfig(
            listen_address=settings.addr,
            cache_duration=settings.cache_duration,
            compress=settings.compress,
            static_dir=settings.static_dir,
            index_file=settings.index_file,
            route_mode=settings.route_mode,
            static_extensions=settings.static_extensions,
            cert_file=settings.cert_file,
            key_file=settings.key_file,
        )
    except ValidationError as e:
        raise ConfigurationError(
            message=_error_message(e), details=_error_details(e)
        ) from e
