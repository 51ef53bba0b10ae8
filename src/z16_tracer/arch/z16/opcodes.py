# src/z16_tracer/arch/z16/opcodes.py
"""
Z16 オペコード定義。

命令の集合は閉じた列挙型として定義し、未知のニーモニックはデコード段階で検出します。
"""
from enum import Enum
from typing import Optional

# @intent:responsibility Z16の全命令を列挙します。値はニーモニック（大文字）です。
class Opcode(Enum):
    # Reg-Reg
    ADD = "ADD"
    SUB = "SUB"
    AND = "AND"
    OR = "OR"
    XOR = "XOR"
    SLT = "SLT"
    SLTU = "SLTU"
    SLL = "SLL"
    SRL = "SRL"
    SRA = "SRA"
    MV = "MV"
    # Reg-Imm
    ADDI = "ADDI"
    ANDI = "ANDI"
    ORI = "ORI"
    XORI = "XORI"
    SLTI = "SLTI"
    SLTUI = "SLTUI"
    SLLI = "SLLI"
    SRLI = "SRLI"
    SRAI = "SRAI"
    LI = "LI"
    LUI = "LUI"
    AUIPC = "AUIPC"
    # Branch
    BEQ = "BEQ"
    BNE = "BNE"
    BLT = "BLT"
    BGE = "BGE"
    BLTU = "BLTU"
    BGEU = "BGEU"
    BZ = "BZ"
    BNZ = "BNZ"
    # Jump
    J = "J"
    JAL = "JAL"
    JR = "JR"
    JALR = "JALR"
    # System
    ECALL = "ECALL"

# @intent:responsibility ニーモニック文字列（大文字小文字を問わない）からOpcodeを引きます。
def lookup_opcode(mnemonic: str) -> Optional[Opcode]:
    try:
        return Opcode(mnemonic.upper())
    except ValueError:
        return None
