"""
レジスタ値の表示フォーマッタ。

10進・2進・16進の3つの表示モードで値を文字列化します。純粋関数であり、状態を持ちません。
"""
from enum import Enum

from z16_tracer.common.word import to_signed, to_unsigned

# @intent:responsibility 表示モードを定義します。値はUIや設定ファイルで使用する文字列です。
class DisplayFormat(Enum):
    DECIMAL = "decimal"
    BINARY = "binary"
    HEX = "hex"

# 2進表示の最小桁数。幅の下限であり、マスクではない。
BINARY_MIN_DIGITS = 8

# @intent:responsibility 32ビット値を指定された表示モードの文字列に変換します。
# @intent:rationale 2進表示は8桁の「最小幅」でゼロ埋めし、それを超える値は切り詰めずに全桁を表示します。
def format_value(value: int, display_format: DisplayFormat) -> str:
    """
    レジスタ値を表示用の文字列に変換します。

    - DECIMAL: 符号付き32ビット整数の10進表記
    - HEX: 符号なし32ビットパターンの大文字16進表記（"0x"接頭辞、固定幅なし）
    - BINARY: 符号なし32ビットパターンの2進表記（"0b"接頭辞、最低8桁）
    """
    if display_format == DisplayFormat.BINARY:
        return "0b" + format(to_unsigned(value), f"0{BINARY_MIN_DIGITS}b")
    if display_format == DisplayFormat.HEX:
        return "0x" + format(to_unsigned(value), "X")
    return str(to_signed(value))

# @intent:responsibility 設定値やUIの文字列からDisplayFormatを解決します。
def parse_display_format(name: str) -> DisplayFormat:
    try:
        return DisplayFormat(name.strip().lower())
    except ValueError:
        raise ValueError(f"Unknown display format: {name}") from None
