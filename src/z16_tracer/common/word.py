# src/z16_tracer/common/word.py
"""
32ビットワード演算ヘルパー。

レジスタ値は常に符号付き32ビット（2の補数）として保持されます。
このモジュールは、符号付き/符号なしの相互変換とラップアラウンドを一元化します。
"""

WORD_BITS = 32
WORD_MASK = 0xFFFFFFFF
SIGN_BIT = 0x80000000

# @intent:responsibility 任意の整数を32ビットのビットパターン（符号なし）に変換します。
def to_unsigned(value: int) -> int:
    return value & WORD_MASK

# @intent:responsibility 任意の整数を32ビットでラップし、符号付きの値として返します。
# @intent:post-condition 戻り値は [-2**31, 2**31) の範囲に収まります。
def to_signed(value: int) -> int:
    value &= WORD_MASK
    if value & SIGN_BIT:
        return value - (1 << WORD_BITS)
    return value
