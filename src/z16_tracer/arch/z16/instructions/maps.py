# src/z16_tracer/arch/z16/instructions/maps.py
"""
Z16 命令マップ。

Opcodeごとにオペランド形式と実行関数を対応付けます。
"""
from typing import Callable, Dict, List, Tuple

from z16_tracer.core.snapshot import Operation
from z16_tracer.core.state import MachineState
from z16_tracer.arch.z16.opcodes import Opcode
from z16_tracer.arch.z16.instructions import alu, load, control
from z16_tracer.arch.z16.instructions.base import RD, RS, IMM, Signature

# Execution Function Type
ExecFunc = Callable[[MachineState, Operation, List[str]], MachineState]

# Instruction Entry: (Operand Signature, Execution Function)
InstructionEntry = Tuple[Signature, ExecFunc]

REG_REG: Signature = (RD, RS)
REG_IMM: Signature = (RD, IMM)
REG_REG_IMM: Signature = (RD, RS, IMM)

INSTRUCTION_MAP: Dict[Opcode, InstructionEntry] = {
    # --- Reg-Reg ---
    Opcode.ADD: (REG_REG, alu.add),
    Opcode.SUB: (REG_REG, alu.sub),
    Opcode.AND: (REG_REG, alu.and_),
    Opcode.OR: (REG_REG, alu.or_),
    Opcode.XOR: (REG_REG, alu.xor),
    Opcode.SLT: (REG_REG, alu.slt),
    Opcode.SLTU: (REG_REG, alu.sltu),
    Opcode.SLL: (REG_REG, alu.sll),
    Opcode.SRL: (REG_REG, alu.srl),
    Opcode.SRA: (REG_REG, alu.sra),
    Opcode.MV: (REG_REG, load.mv),

    # --- Reg-Imm ---
    Opcode.ADDI: (REG_IMM, alu.addi),
    Opcode.ANDI: (REG_IMM, alu.andi),
    Opcode.ORI: (REG_IMM, alu.ori),
    Opcode.XORI: (REG_IMM, alu.xori),
    Opcode.SLTI: (REG_IMM, alu.slti),
    Opcode.SLTUI: (REG_IMM, alu.sltui),
    Opcode.SLLI: (REG_IMM, alu.slli),
    Opcode.SRLI: (REG_IMM, alu.srli),
    Opcode.SRAI: (REG_IMM, alu.srai),
    Opcode.LI: (REG_IMM, load.li),
    Opcode.LUI: (REG_IMM, load.lui),
    Opcode.AUIPC: (REG_IMM, load.auipc),

    # --- Branch ---
    Opcode.BEQ: (REG_REG_IMM, control.beq),
    Opcode.BNE: (REG_REG_IMM, control.bne),
    Opcode.BLT: (REG_REG_IMM, control.blt),
    Opcode.BGE: (REG_REG_IMM, control.bge),
    Opcode.BLTU: (REG_REG_IMM, control.bltu),
    Opcode.BGEU: (REG_REG_IMM, control.bgeu),
    Opcode.BZ: (REG_IMM, control.bz),
    Opcode.BNZ: (REG_IMM, control.bnz),

    # --- Jump ---
    Opcode.J: ((IMM,), control.j),
    Opcode.JAL: ((IMM,), control.jal),
    Opcode.JR: ((RS,), control.jr),
    Opcode.JALR: (REG_REG, control.jalr),

    # --- System ---
    Opcode.ECALL: ((RD,), control.ecall),
}

# @intent:responsibility 全てのOpcodeに実装が割り当てられていることを、import時に保証します。
_missing = set(Opcode) - set(INSTRUCTION_MAP)
if _missing:
    raise RuntimeError(f"Opcodes without implementation: {sorted(op.value for op in _missing)}")
