"""ETag生成"""

import hashlib


def compute_etag(body: bytes, weak: bool = False) -> str:
    """
    レスポンスボディからETagヘッダー値を生成する

    SHA-1のhexダイジェストをダブルクォートで囲んだ値を返す。
    weakの場合は "W/" を先頭に付与する。

    Args:
        body: レスポンスボディ
        weak: 弱いETagとして生成するか

    Returns:
        ETagヘッダー値

    Examples:
        >>> compute_etag(b"This is a test body.")
        '"2c1a253771877942941e797d4907366001204c29"'
    """
    digest = hashlib.sha1(body).hexdigest()
    prefix = "W/" if weak else ""
    return f'{prefix}"{digest}"'


def etag_matches(if_none_match: str, etag: str) -> bool:
    """
    If-None-Matchヘッダー値がETagに一致するか（弱い比較）

    "*" は常に一致する。カンマ区切りの複数指定に対応する。
    """
    if if_none_match.strip() == "*":
        return True
    target = etag.removeprefix("W/")
    return any(
        tag.strip().removeprefix("W/") == target for tag in if_none_match.split(",")
    )
