# src/z16_tracer/arch/z16/instructions/alu.py
"""
Z16 算術論理演算命令 (ALU)。
加減算・論理演算・比較・シフトを、レジスタ同士およびレジスタと即値の両形式で実装します。
"""
from typing import Callable, List

from z16_tracer.core.snapshot import Operation
from z16_tracer.core.state import MachineState
from z16_tracer.common.word import to_signed, to_unsigned

# シフト量は下位5ビットのみ有効
SHIFT_MASK = 0x1F

BinaryOp = Callable[[int, int], int]

# --- 演算本体 (結果の32ビットラップはMachineState側で行う) ---

def _add(a: int, b: int) -> int: return a + b
def _sub(a: int, b: int) -> int: return a - b
def _and(a: int, b: int) -> int: return a & b
def _or(a: int, b: int) -> int: return a | b
def _xor(a: int, b: int) -> int: return a ^ b

# @intent:responsibility 符号付き比較。
def _slt(a: int, b: int) -> int:
    return 1 if to_signed(a) < to_signed(b) else 0

# @intent:responsibility 符号なし比較。0xFFFFFFFFは1より大きい。
def _sltu(a: int, b: int) -> int:
    return 1 if to_unsigned(a) < to_unsigned(b) else 0

def _sll(a: int, b: int) -> int:
    return to_unsigned(a) << (b & SHIFT_MASK)

# @intent:note 論理右シフトは符号なしのビットパターンに対して行う。
def _srl(a: int, b: int) -> int:
    return to_unsigned(a) >> (b & SHIFT_MASK)

# @intent:note 算術右シフトは符号を保持する。
def _sra(a: int, b: int) -> int:
    return to_signed(a) >> (b & SHIFT_MASK)

# @intent:responsibility rd <- rd OP rs
def _reg_reg(state: MachineState, operation: Operation, op: BinaryOp) -> MachineState:
    rd, rs = operation.args
    return state.with_register(rd, op(state.registers[rd], state.registers[rs]))

# @intent:responsibility rd <- rd OP imm
def _reg_imm(state: MachineState, operation: Operation, op: BinaryOp) -> MachineState:
    rd, imm = operation.args
    return state.with_register(rd, op(state.registers[rd], imm))

# --- Reg-Reg ---

def add(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_reg(state, operation, _add)

def sub(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_reg(state, operation, _sub)

def and_(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_reg(state, operation, _and)

def or_(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_reg(state, operation, _or)

def xor(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_reg(state, operation, _xor)

def slt(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_reg(state, operation, _slt)

def sltu(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_reg(state, operation, _sltu)

def sll(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_reg(state, operation, _sll)

def srl(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_reg(state, operation, _srl)

def sra(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_reg(state, operation, _sra)

# --- Reg-Imm ---

def addi(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_imm(state, operation, _add)

def andi(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_imm(state, operation, _and)

def ori(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_imm(state, operation, _or)

def xori(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_imm(state, operation, _xor)

def slti(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_imm(state, operation, _slt)

def sltui(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_imm(state, operation, _sltu)

def slli(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_imm(state, operation, _sll)

def srli(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_imm(state, operation, _srl)

def srai(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    return _reg_imm(state, operation, _sra)
