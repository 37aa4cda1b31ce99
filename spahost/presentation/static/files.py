"""インデックスファイル対応の静的ファイルサーバー"""

import os
import stat
from typing import Any, Iterable, MutableMapping, Optional

from fastapi import Response
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException


class IndexedStaticFiles(StaticFiles):
    """
    ディレクトリへのリクエストにインデックスファイルを返す静的ファイルサーバー

    Range/条件付きリクエストの扱いはStarletteのStaticFilesに委譲する。
    html=Trueとは異なり、404.htmlの探索やリダイレクトは行わない。
    """

    def __init__(
        self,
        *,
        directory: str | os.PathLike[str],
        index_names: Iterable[str] = ("index.html",),
        check_dir: bool = False,
        follow_symlink: bool = False,
    ) -> None:
        super().__init__(
            directory=directory, check_dir=check_dir, follow_symlink=follow_symlink
        )
        self.index_names = tuple(index_names)

    @property
    def root(self) -> str:
        """配信ルートディレクトリ"""
        return str(self.directory)

    async def get_response(
        self, path: str, scope: MutableMapping[str, Any]
    ) -> Response:
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as ex:
            if ex.status_code == 404:
                response = await self.index_response(path, scope)
                if response is not None:
                    return response
            raise ex

    async def index_response(
        self, path: str, scope: MutableMapping[str, Any]
    ) -> Optional[Response]:
        """
        pathがディレクトリの場合、最初に見つかったインデックスファイルを返す

        Returns:
            インデックスファイルのレスポンス。該当なしの場合None
        """
        _, stat_result = await run_in_threadpool(self.lookup_path, path)
        if stat_result is None or not stat.S_ISDIR(stat_result.st_mode):
            return None

        for name in self.index_names:
            response = await self.send_file(os.path.join(path, name), scope)
            if response.status_code != 404:
                return response
        return None

    async def send_file(
        self, path: str, scope: MutableMapping[str, Any], status_code: int = 200
    ) -> Response:
        """
        ルートからの相対パスで指定したファイルを返す

        ファイルが存在しない場合は404を返す（200への読み替えは行わない）。
        """
        full_path, stat_result = await run_in_threadpool(self.lookup_path, path)
        if stat_result is None or not stat.S_ISREG(stat_result.st_mode):
            return PlainTextResponse("Not Found", status_code=404)
        return self.file_response(full_path, stat_result, scope, status_code)
