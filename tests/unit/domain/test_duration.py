"""
キャッシュ期間パースの単体テスト
"""

from datetime import timedelta

import pytest

from spahost.domain.duration import cache_control_value, parse_duration


class TestParseDuration:
    """parse_duration関数のテスト"""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("720h", timedelta(hours=720)),
            ("1h30m", timedelta(hours=1, minutes=30)),
            ("90s", timedelta(seconds=90)),
            ("1.5h", timedelta(minutes=90)),
            ("300ms", timedelta(milliseconds=300)),
            ("10us", timedelta(microseconds=10)),
            ("10µs", timedelta(microseconds=10)),
            ("1500ns", timedelta(microseconds=1)),
            ("2h45m30.5s", timedelta(hours=2, minutes=45, seconds=30.5)),
            ("0", timedelta(0)),
            ("0s", timedelta(0)),
            ("+5m", timedelta(minutes=5)),
            (" 24h ", timedelta(hours=24)),
        ],
    )
    def test_valid(self, value: str, expected: timedelta) -> None:
        """有効な期間文字列をパースできること"""
        assert parse_duration(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["invalid", "", "h", "10", "10x", "1h5", ".h", "-1h", "1 h", "1d"],
    )
    def test_invalid(self, value: str) -> None:
        """不正な期間文字列でValueErrorが発生すること"""
        with pytest.raises(ValueError):
            parse_duration(value)


class TestCacheControlValue:
    """cache_control_value関数のテスト"""

    def test_720h(self) -> None:
        """720時間が2592000秒になること"""
        assert cache_control_value(parse_duration("720h")) == "max-age=2592000, public"

    def test_seconds_are_floored(self) -> None:
        """秒未満が切り捨てられること"""
        assert cache_control_value(timedelta(seconds=1.999)) == "max-age=1, public"

    def test_zero(self) -> None:
        """0の場合max-age=0になること"""
        assert cache_control_value(timedelta(0)) == "max-age=0, public"
