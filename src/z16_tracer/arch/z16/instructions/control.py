# src/z16_tracer/arch/z16/instructions/control.py
"""
Z16 制御系命令 (Branch, Jump, ECALL)。
"""
from typing import List

from z16_tracer.core.snapshot import Operation
from z16_tracer.core.state import MachineState, LINK_REGISTER
from z16_tracer.common.word import to_signed, to_unsigned
from z16_tracer.arch.z16.instructions.base import check_target

# @intent:note 分岐命令の実装について
# AbstractCpu.step() のフロー:
# 1. Fetch / Decode -> Operation (addressは命令自身のPC)
# 2. Update PC (PC += 1)
# 3. Execute -> ここで PC を書き換えると、それが次の Fetch 位置になる。
# つまり、不成立時は何もしなくて良い（PC+=1 済み）。
# 成立時は PC = address + offset とする。オフセットは実行可能行の単位で数える。

def _branch(state: MachineState, operation: Operation, offset: int, condition: bool) -> MachineState:
    if condition:
        return state.replace(pc=check_target(operation.address + offset))
    return state

# --- Branch Instructions ---

def beq(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    rd, rs, imm = operation.args
    return _branch(state, operation, imm, state.registers[rd] == state.registers[rs])

def bne(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    rd, rs, imm = operation.args
    return _branch(state, operation, imm, state.registers[rd] != state.registers[rs])

def blt(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    rd, rs, imm = operation.args
    return _branch(state, operation, imm, to_signed(state.registers[rd]) < to_signed(state.registers[rs]))

def bge(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    rd, rs, imm = operation.args
    return _branch(state, operation, imm, to_signed(state.registers[rd]) >= to_signed(state.registers[rs]))

def bltu(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    rd, rs, imm = operation.args
    return _branch(state, operation, imm, to_unsigned(state.registers[rd]) < to_unsigned(state.registers[rs]))

def bgeu(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    rd, rs, imm = operation.args
    return _branch(state, operation, imm, to_unsigned(state.registers[rd]) >= to_unsigned(state.registers[rs]))

# @intent:note ゼロ判定分岐はrsスロットを持たず、第2オペランドがオフセット。
def bz(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    rd, imm = operation.args
    return _branch(state, operation, imm, state.registers[rd] == 0)

def bnz(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    rd, imm = operation.args
    return _branch(state, operation, imm, state.registers[rd] != 0)

# --- Jump Instructions ---

def j(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    (imm,) = operation.args
    return state.replace(pc=check_target(operation.address + imm))

# @intent:responsibility x7 <- pc + 1; pc <- pc + imm
def jal(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    (imm,) = operation.args
    target = check_target(operation.address + imm)
    return state.with_register(LINK_REGISTER, operation.address + 1).replace(pc=target)

def jr(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    (rs,) = operation.args
    return state.replace(pc=check_target(state.registers[rs]))

# @intent:responsibility rd <- pc + 1; pc <- rs
# @intent:note rdとrsが同じレジスタでも正しく戻れるよう、ジャンプ先を先に読み出す。
def jalr(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    rd, rs = operation.args
    target = check_target(state.registers[rs])
    return state.with_register(rd, operation.address + 1).replace(pc=target)

# --- System ---

# @intent:responsibility レジスタ値を10進文字列としてトラップ出力に送ります。レジスタとPCには副作用を持ちません。
def ecall(state: MachineState, operation: Operation, trap_output: List[str]) -> MachineState:
    (rd,) = operation.args
    trap_output.append(str(state.registers[rd]))
    return state
