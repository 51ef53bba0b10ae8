# src/z16_tracer/arch/z16/instructions/load.py
"""
Z16 転送・即値ロード命令 (MV, LI, LUI, AUIPC)。
"""
from typing import List

from z16_tracer.core.snapshot import Operation
from z16_tracer.core.state import MachineState

UPPER_SHIFT = 12

def mv(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    rd, rs = operation.args
    return state.with_register(rd, state.registers[rs])

def li(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    rd, imm = operation.args
    return state.with_register(rd, imm)

# @intent:responsibility rd <- imm << 12
def lui(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    rd, imm = operation.args
    return state.with_register(rd, imm << UPPER_SHIFT)

# @intent:responsibility rd <- pc + (imm << 12)
# @intent:note pcは命令自身のインデックス（PC更新前の値）を使う。
def auipc(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    rd, imm = operation.args
    return state.with_register(rd, operation.address + (imm << UPPER_SHIFT))
