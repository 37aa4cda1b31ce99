"""spahost CLI"""

from typing import Any, Optional

import click
from click.core import ParameterSource

from .core.app_factory import create_app
from .core.config import load_server_config
from .core.logging import get_logger, get_request_logger
from .core.monitoring import init_monitoring
from .core.server import listen_and_serve
from .domain.exceptions.base import ConfigurationError, ListenerError


def command_line_overrides(ctx: click.Context, params: dict[str, Any]) -> dict[str, Any]:
    """
    コマンドラインで明示的に指定された値のみを取り出す

    未指定のオプションは環境変数・設定ファイルの値を上書きしない。
    """
    return {
        name: value
        for name, value in params.items()
        if ctx.get_parameter_source(name) is ParameterSource.COMMANDLINE
    }


@click.command()
@click.option("--addr", default="localhost:80", help="expose address and port")
@click.option(
    "--cd",
    "cache_duration",
    default="720h",
    help="cache duration (e.g. 720h, 1h30m, 90s)",
)
@click.option("--cert", "cert_file", default="", help="ssl cert file location")
@click.option("--key", "key_file", default="", help="ssl key file location")
@click.option(
    "--compress",
    is_flag=True,
    help="whether or not to gzip compress static files",
)
@click.option("--index", "index_file", default="index.html", help="default index file location")
@click.option("--dir", "static_dir", default="web", help="static file location")
@click.option(
    "--route-mode",
    type=click.Choice(["regex", "stat", "static"], case_sensitive=False),
    default=None,
    help="how to decide between static file and SPA route",
)
@click.version_option(package_name="spahost")
@click.pass_context
def cli(ctx: click.Context, **params: Optional[Any]) -> None:
    """SPAフォールバック対応の静的ファイルサーバー"""
    try:
        config = load_server_config(overrides=command_line_overrides(ctx, params))
    except ConfigurationError as e:
        click.echo(f"✗ {e.message}", err=True)
        raise click.Abort()

    init_monitoring()

    app = create_app(config, logger=get_request_logger())

    try:
        listen_and_serve(app, config)
    except ListenerError as e:
        get_logger(__name__).critical(f"failed starting server: {e.message}")
        raise click.Abort()
