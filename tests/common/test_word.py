# tests/common/test_word.py
"""
z16_tracer.common.wordモジュールの単体テスト。
"""
import pytest

from z16_tracer.common.word import to_signed, to_unsigned

# @intent:test_suite 32ビットの符号付き/符号なし変換とラップアラウンドの検証。

@pytest.mark.parametrize("value, signed, unsigned", [
    (0, 0, 0),
    (1, 1, 1),
    (-1, -1, 0xFFFFFFFF),
    (0x7FFFFFFF, 0x7FFFFFFF, 0x7FFFFFFF),
    (0x80000000, -2147483648, 0x80000000),
    (1 << 32, 0, 0),
    ((1 << 32) + 7, 7, 7),
    (-(1 << 31) - 1, 0x7FFFFFFF, 0x7FFFFFFF),
])
def test_conversion(value, signed, unsigned):
    assert to_signed(value) == signed
    assert to_unsigned(value) == unsigned

def test_round_trip():
    for value in (-5, 0, 42, -2147483648, 2147483647):
        assert to_signed(to_unsigned(value)) == value
