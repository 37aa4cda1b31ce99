"""リスニングソケットの生成とサーバーの起動"""

import socket

import uvicorn
from fastapi import FastAPI

from ..domain.exceptions.base import ListenerError
from .config import ServerConfig
from .logging import build_log_config

DEFAULT_BACKLOG = 2048


def create_listen_socket(
    host: str, port: int, backlog: int = DEFAULT_BACKLOG
) -> socket.socket:
    """
    Create/bind/listen.
    Address family is taken from getaddrinfo so that IPv6 hosts work as well.
    An empty host binds all interfaces.
    """
    family, socktype, proto, _, sockaddr = socket.getaddrinfo(
        host or None, port, type=socket.SOCK_STREAM, flags=socket.AI_PASSIVE
    )[0]

    sock = socket.socket(family, socktype, proto)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(sockaddr)
        sock.listen(backlog)
    except OSError:
        sock.close()
        raise

    sock.set_inheritable(True)
    return sock


def build_uvicorn_config(app: FastAPI, config: ServerConfig) -> uvicorn.Config:
    """
    uvicornの設定を生成する

    Serverヘッダーとアクセスログはアプリケーション側で出力するため無効化する。
    """
    return uvicorn.Config(
        app,
        host=config.host or "0.0.0.0",
        port=config.port,
        backlog=DEFAULT_BACKLOG,
        server_header=False,
        access_log=False,
        log_config=build_log_config(),
        ssl_certfile=str(config.cert_file) if config.use_tls else None,
        ssl_keyfile=str(config.key_file) if config.use_tls else None,
    )


def listen_and_serve(app: FastAPI, config: ServerConfig) -> None:
    """
    ソケットをbindし、シャットダウンされるまでリクエストを処理する（ブロッキング）

    証明書と鍵の両方が設定されている場合はTLSで待ち受ける。
    リトライは行わない。

    Args:
        app: FastAPIアプリケーションインスタンス
        config: サーバー設定

    Raises:
        ListenerError: TLS証明書の読み込み、またはソケットのbind/listenに失敗した場合
    """
    uv_config = build_uvicorn_config(app, config)

    try:
        uv_config.load()
    except OSError as e:
        raise ListenerError(
            f"failed loading TLS material: {e}",
            details={"cert_file": str(config.cert_file), "key_file": str(config.key_file)},
        ) from e

    try:
        sock = create_listen_socket(config.host, config.port)
    except OSError as e:
        raise ListenerError(
            f"failed listening on {config.listen_address}: {e}",
            details={"address": config.listen_address},
        ) from e

    server = uvicorn.Server(uv_config)
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()
