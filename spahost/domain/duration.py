"""キャッシュ期間のパースとCache-Controlヘッダー値の生成"""

import re
from datetime import timedelta
from decimal import Decimal, InvalidOperation

# 単位ごとのマイクロ秒換算
_UNITS: dict[str, Decimal] = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),
    "μs": Decimal(1),
    "ms": Decimal(1_000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
}

_COMPONENT_RX = re.compile(r"(\d*\.?\d*)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(value: str) -> timedelta:
    """
    "720h" や "1h30m" のような期間文字列をtimedeltaに変換する

    符号付きの値は受け付けない（キャッシュ期間は非負である必要がある）。
    単位なしで許されるのは "0" のみ。

    Args:
        value: 期間文字列

    Returns:
        timedelta: パース結果

    Raises:
        ValueError: 期間として解釈できない場合
    """
    text = value.strip()
    if text.startswith("-"):
        raise ValueError(f"duration must not be negative: {value!r}")
    text = text.removeprefix("+")
    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration: {value!r}")

    total = Decimal(0)
    pos = 0
    while pos < len(text):
        match = _COMPONENT_RX.match(text, pos)
        if match is None or match.group(1) in ("", "."):
            raise ValueError(f"invalid duration: {value!r}")
        try:
            amount = Decimal(match.group(1))
        except InvalidOperation:
            raise ValueError(f"invalid duration: {value!r}") from None
        total += amount * _UNITS[match.group(2)]
        pos = match.end()

    return timedelta(microseconds=int(total))


def cache_control_value(duration: timedelta) -> str:
    """Cache-Controlヘッダー値（秒は切り捨て）"""
    seconds = duration // timedelta(seconds=1)
    return f"max-age={seconds}, public"
