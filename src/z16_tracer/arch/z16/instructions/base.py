# src/z16_tracer/arch/z16/instructions/base.py
"""
Z16 オペランド解釈ロジック。

デコーダが分割したトークンを、命令ごとのオペランド形式に従ってレジスタ番号や即値に変換します。
"""
import re
from enum import Enum
from typing import NamedTuple, Sequence, Tuple

from z16_tracer.core.errors import DecodeError
from z16_tracer.core.state import REGISTER_COUNT

# "0x3" と "x3" の両方をレジスタとして受け付ける。設定で片方に絞ることができる。
DEFAULT_REGISTER_PREFIXES: Tuple[str, ...] = ("x", "0x")

_IMMEDIATE = re.compile(r"^([+-]?)(0x[0-9a-f]+|0b[01]+|[0-9]+)$", re.IGNORECASE)

# @intent:responsibility オペランドの種類を定義します。
class OperandKind(Enum):
    REGISTER = "register"
    IMMEDIATE = "immediate"

# @intent:data_structure オペランド1つ分の形式定義（表示名と種類）。
class OperandSpec(NamedTuple):
    name: str
    kind: OperandKind

RD = OperandSpec("rd", OperandKind.REGISTER)
RS = OperandSpec("rs", OperandKind.REGISTER)
IMM = OperandSpec("imm", OperandKind.IMMEDIATE)

Signature = Tuple[OperandSpec, ...]

# @intent:responsibility レジスタオペランド（例: "x3", "0x3"）をレジスタ番号に変換します。
# @intent:note 接頭辞は長いものから照合する（"0x"が"x"より優先）。
def parse_register(token: str, prefixes: Sequence[str] = DEFAULT_REGISTER_PREFIXES) -> int:
    text = token.strip().lower()
    for prefix in sorted(prefixes, key=len, reverse=True):
        if not text.startswith(prefix.lower()):
            continue
        number = text[len(prefix):]
        if number.isdigit() and int(number) < REGISTER_COUNT:
            return int(number)
        break
    raise DecodeError(f"Invalid register: {token}")

# @intent:responsibility 即値オペランドを整数に変換します。10進、0x（16進）、0b（2進）、符号付きに対応します。
def parse_immediate(token: str) -> int:
    match = _IMMEDIATE.match(token.strip())
    if not match:
        raise DecodeError(f"Invalid immediate value: {token}")
    sign, digits = match.groups()
    lowered = digits.lower()
    if lowered.startswith("0x"):
        value = int(lowered[2:], 16)
    elif lowered.startswith("0b"):
        value = int(lowered[2:], 2)
    else:
        value = int(lowered, 10)
    return -value if sign == "-" else value

# @intent:responsibility 命令の形式定義に従ってオペランド列を解釈します。
# @intent:pre-condition 個数が一致しない場合はDecodeErrorを送出します。
def decode_operands(mnemonic: str, operands: Sequence[str], signature: Signature,
                    prefixes: Sequence[str] = DEFAULT_REGISTER_PREFIXES) -> Tuple[int, ...]:
    if len(operands) != len(signature):
        expected = ", ".join(spec.name for spec in signature) or "no operands"
        raise DecodeError(f"{mnemonic} expects {len(signature)} operand(s) ({expected}), got {len(operands)}")

    args = []
    for token, spec in zip(operands, signature):
        if spec.kind == OperandKind.REGISTER:
            args.append(parse_register(token, prefixes))
        else:
            args.append(parse_immediate(token))
    return tuple(args)

# @intent:responsibility 分岐・ジャンプ先のPCを検証します。
# @intent:rationale PCは負にならない（PC >= 0）。上限はCPU側で終端として扱う。
def check_target(target: int) -> int:
    if target < 0:
        raise DecodeError(f"Jump target {target} is before the first instruction")
    return target
