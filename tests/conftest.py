"""
pytest設定と共通フィクスチャ
"""

import contextlib
from pathlib import Path
from typing import Any, Callable, Generator

import pytest
from fastapi.testclient import TestClient

from spahost.core.app_factory import create_app
from spahost.core.config import ServerConfig, get_settings
from tests.helpers import (
    DOCS_INDEX_HTML,
    INDEX_HTML,
    STYLE_CSS,
    TEST_JS,
    RecordingLogger,
)


@pytest.fixture(autouse=True)
def isolated_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """
    設定の読み込みをテストごとに分離する

    /etc/spahost/config.json がテスト結果に影響しないよう設定ファイルのパスを差し替え、
    get_settings()のキャッシュをクリアする
    """
    monkeypatch.setenv("SPAHOST_CONFIG_FILE", str(tmp_path / "no-config.json"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """
    テスト用の静的ファイルディレクトリ

    web/
      index.html
      test.js
      style.css
      docs/index.html
    """
    root = tmp_path / "web"
    root.mkdir()
    (root / "index.html").write_text(INDEX_HTML)
    (root / "test.js").write_text(TEST_JS)
    (root / "style.css").write_text(STYLE_CSS)
    (root / "docs").mkdir()
    (root / "docs" / "index.html").write_text(DOCS_INDEX_HTML)
    return root


@pytest.fixture
def request_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def make_client(
    static_dir: Path, request_logger: RecordingLogger
) -> Generator[Callable[..., TestClient], None, None]:
    """
    ServerConfigを指定してTestClientを生成するファクトリ

    ファクトリの引数はServerConfigのフィールド（static_dirとcache_durationは既定値あり）
    """
    with contextlib.ExitStack() as stack:

        def factory(**overrides: Any) -> TestClient:
            params: dict[str, Any] = {"static_dir": static_dir, "cache_duration": "720h"}
            params.update(overrides)
            app = create_app(ServerConfig(**params), logger=request_logger)
            return stack.enter_context(TestClient(app))

        yield factory


@pytest.fixture
def client(make_client: Callable[..., TestClient]) -> TestClient:
    """regexモードのテスト用クライアント"""
    return make_client()
