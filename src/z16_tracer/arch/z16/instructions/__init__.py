"""
Z16命令セット実装パッケージ。
"""
from typing import List, Sequence

from z16_tracer.core.errors import DecodeError, UnknownOpcodeError
from z16_tracer.core.snapshot import Operation
from z16_tracer.core.state import MachineState
from z16_tracer.arch.z16.decoder import tokenize, strip_comment
from z16_tracer.arch.z16.opcodes import lookup_opcode
from .base import DEFAULT_REGISTER_PREFIXES, decode_operands
from .maps import INSTRUCTION_MAP

# @intent:responsibility 1行のテキストをZ16の命令としてデコードします。
def decode_line(line: str, pc: int, register_prefixes: Sequence[str] = DEFAULT_REGISTER_PREFIXES) -> Operation:
    """
    行をトークンに分割し、ニーモニックとオペランドを命令の形式に従って解釈したOperationを返します。
    解釈できない場合はDecodeError（ニーモニックが未知の場合はUnknownOpcodeError）を送出します。
    """
    source = strip_comment(line).strip()
    tokens = tokenize(line)
    if not tokens:
        raise DecodeError("Empty instruction", pc, source)

    opcode = lookup_opcode(tokens[0])
    if opcode is None:
        raise UnknownOpcodeError(f"Unknown instruction: {tokens[0]}", pc, source)

    signature, _ = INSTRUCTION_MAP[opcode]
    operands = tuple(tokens[1:])
    try:
        args = decode_operands(opcode.value, operands, signature, register_prefixes)
    except DecodeError as e:
        raise DecodeError(e.message, pc, source) from None

    return Operation(opcode=opcode, mnemonic=opcode.value, operands=operands, args=args, address=pc, source=source)

# @intent:responsibility デコードされたZ16命令を実行し、新しい状態を返します。
def execute_instruction(operation: Operation, state: MachineState, trap_output: List[str]) -> MachineState:
    """
    stateはPC更新済み（+1）の状態です。分岐命令はPCを上書きします。
    """
    _, executor = INSTRUCTION_MAP[operation.opcode]
    try:
        return executor(state, operation, trap_output)
    except DecodeError as e:
        if e.pc is not None:
            raise
        raise type(e)(e.message, operation.address, operation.source) from None
