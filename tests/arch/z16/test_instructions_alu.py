# tests/arch/z16/test_instructions_alu.py
"""
Z16 ALU命令（加減算、論理演算、比較、シフト）の単体テスト。
"""
import pytest

from z16_tracer.arch.z16.cpu import Z16Cpu
from z16_tracer.core.state import MachineState

# @intent:test_suite 32ビットのラップアラウンドと符号付き/符号なしの区別を検証します。

def execute(line, registers=None):
    """
    指定したレジスタ値から1命令を実行し、実行後の状態を返します。
    """
    cpu = Z16Cpu()
    regs = [0] * 8
    for index, value in (registers or {}).items():
        regs[index] = value
    cpu.restore_state(MachineState(registers=tuple(regs)))
    snapshot = cpu.step(line)
    assert snapshot.error is None, snapshot.error
    return cpu.get_state()

class TestRegReg:
    @pytest.mark.parametrize("a, b", [
        (5, 10),
        (0x7FFFFFFF, 1),
        (-1, -1),
        (-2147483648, -1),
        (123456789, 987654321),
    ])
    # @intent:test_case_add_wrap ADD rd, rs の結果が (a + b) mod 2^32 になり、PCが1だけ進むことを検証します。
    def test_add_wraps(self, a, b):
        state = execute("ADD x1, x2", {1: a, 2: b})
        assert state.registers[1] & 0xFFFFFFFF == (a + b) % (1 << 32)
        assert state.pc == 1

    def test_add_overflow_to_negative(self):
        state = execute("ADD x1, x2", {1: 0x7FFFFFFF, 2: 1})
        assert state.registers[1] == -2147483648

    def test_sub(self):
        assert execute("SUB x1, x2", {1: 3, 2: 5}).registers[1] == -2
        assert execute("SUB x1, x2", {1: -2147483648, 2: 1}).registers[1] == 2147483647

    def test_logic(self):
        assert execute("AND x1, x2", {1: 0b1100, 2: 0b1010}).registers[1] == 0b1000
        assert execute("OR x1, x2", {1: 0b1100, 2: 0b1010}).registers[1] == 0b1110
        assert execute("XOR x1, x2", {1: 0b1100, 2: 0b1010}).registers[1] == 0b0110
        assert execute("XOR x1, x2", {1: -1, 2: 0}).registers[1] == -1

    def test_mv(self):
        state = execute("MV x3, x4", {4: -7})
        assert state.registers[3] == -7
        assert state.registers[4] == -7

    # @intent:test_case_same_register rdとrsが同じレジスタでも正しく動作することを検証します。
    def test_add_same_register(self):
        assert execute("ADD x1, x1", {1: 21}).registers[1] == 42

class TestCompare:
    # @intent:test_case_signed_unsigned 0xFFFFFFFFは符号付きでは-1 < 1、符号なしでは1より大きいことを検証します。
    def test_slt_vs_sltu(self):
        assert execute("SLT x1, x2", {1: -1, 2: 1}).registers[1] == 1
        assert execute("SLTU x1, x2", {1: -1, 2: 1}).registers[1] == 0
        assert execute("SLTU x2, x1", {1: -1, 2: 1}).registers[2] == 1

    def test_slt_equal_is_zero(self):
        assert execute("SLT x1, x2", {1: 4, 2: 4}).registers[1] == 0

    def test_slti_sltui(self):
        assert execute("SLTI x1, 0", {1: -5}).registers[1] == 1
        assert execute("SLTUI x1, 0", {1: -5}).registers[1] == 0
        # 即値 -1 は符号なしでは 0xFFFFFFFF
        assert execute("SLTUI x1, -1", {1: 5}).registers[1] == 1

    # @intent:test_case_round_trip LUI+ORIで0xFFFFFFFFを作り、符号付き/符号なし比較で逆の結果になることを検証します。
    def test_round_trip_via_lui_ori(self):
        cpu = Z16Cpu()
        source = "\n".join([
            "LUI x1, 0xFFFFF",
            "ORI x1, 0xFFF",
            "LI x2, 1",
            "MV x3, x1",
            "SLT x1, x2",
            "SLTU x3, x2",
        ])
        for _ in range(6):
            assert cpu.step(source).error is None
        state = cpu.get_state()
        assert state.registers[1] == 1  # -1 < 1
        assert state.registers[3] == 0  # 0xFFFFFFFF > 1

class TestShift:
    def test_sll(self):
        assert execute("SLL x1, x2", {1: 1, 2: 4}).registers[1] == 16
        assert execute("SLLI x1, 31", {1: 1}).registers[1] == -2147483648
        assert execute("SLLI x1, 1", {1: -2147483648}).registers[1] == 0

    # @intent:test_case_srl 論理右シフトは符号なしのビットパターンを扱うことを検証します。
    def test_srl_is_logical(self):
        assert execute("SRL x1, x2", {1: -1, 2: 28}).registers[1] == 0xF
        assert execute("SRLI x1, 1", {1: -2}).registers[1] == 0x7FFFFFFF

    # @intent:test_case_sra 算術右シフトは符号を保持することを検証します。
    def test_sra_preserves_sign(self):
        assert execute("SRA x1, x2", {1: -16, 2: 2}).registers[1] == -4
        assert execute("SRAI x1, 31", {1: -2147483648}).registers[1] == -1
        assert execute("SRAI x1, 1", {1: 64}).registers[1] == 32

    # @intent:test_case_shift_amount シフト量はrsの下位5ビットのみが有効であることを検証します。
    def test_shift_amount_uses_low_five_bits(self):
        assert execute("SLL x1, x2", {1: 1, 2: 33}).registers[1] == 2
        assert execute("SLLI x1, 32", {1: 3}).registers[1] == 3

class TestRegImm:
    def test_addi(self):
        assert execute("ADDI x0, 10").registers[0] == 10
        assert execute("ADDI x0, -11", {0: 10}).registers[0] == -1
        assert execute("ADDI x0, 1", {0: 0x7FFFFFFF}).registers[0] == -2147483648

    def test_immediate_formats(self):
        assert execute("ADDI x0, 0x10").registers[0] == 16
        assert execute("ADDI x0, 0b101").registers[0] == 5
        assert execute("ADDI x0, -0x10").registers[0] == -16
        assert execute("ADDI x0, +7").registers[0] == 7

    def test_andi_ori_xori(self):
        assert execute("ANDI x1, 0xF0", {1: 0xFF}).registers[1] == 0xF0
        assert execute("ORI x1, 0x0F", {1: 0xF0}).registers[1] == 0xFF
        assert execute("XORI x1, -1", {1: 0}).registers[1] == -1
