# tests/core/test_abstract_cpu.py
"""
z16_tracer.core.cpuモジュールの単体テスト。
最小限の命令だけを持つテスト用CPUで、命令サイクルのテンプレートメソッドを検証します。
"""
from typing import List

from z16_tracer.core.cpu import AbstractCpu
from z16_tracer.core.errors import DecodeError, Z16Error
from z16_tracer.core.snapshot import Operation
from z16_tracer.core.state import MachineState
from z16_tracer.common.types import RegisterLayoutInfo, RegisterInfo, RegisterMap

# @intent:test_suite 抽象CPUの状態管理とステップ実行の流れを検証します。

class FakeCpu(AbstractCpu):
    """
    "INC" (x0 += 1)、"OUT" (x0を出力)、"BAD" (実行時エラー) だけを理解するテスト用CPU。
    """
    def _create_initial_state(self) -> MachineState:
        return MachineState()

    def _fetch_program(self, program_text: str) -> List[str]:
        return [line.strip() for line in program_text.splitlines() if line.strip()]

    def _decode(self, line: str, pc: int) -> Operation:
        if line not in ("INC", "OUT", "BAD"):
            raise DecodeError(f"Unknown: {line}", pc, line)
        return Operation(opcode=None, mnemonic=line, address=pc, source=line)

    def _execute(self, operation: Operation, state: MachineState, trap_output: List[str]) -> MachineState:
        if operation.mnemonic == "INC":
            return state.with_register(0, state.registers[0] + 1)
        if operation.mnemonic == "OUT":
            trap_output.append(str(state.registers[0]))
            return state
        # 出力を書いた後にエラーを送出しても、ログには反映されない
        trap_output.append("partial")
        raise Z16Error("boom")

    def get_register_map(self) -> RegisterMap:
        return {"x0": self._state.registers[0], "PC": self._state.pc}

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [RegisterLayoutInfo("Test Group", [RegisterInfo("x0", 32), RegisterInfo("PC", 32)])]

class TestAbstractCpu:
    # @intent:test_case_step stepがPCを1進め、実行結果をSnapshotとして返すことを検証します。
    def test_step_advances_pc(self):
        cpu = FakeCpu()
        snapshot = cpu.step("INC\nINC")
        assert snapshot.state.pc == 1
        assert snapshot.state.registers[0] == 1
        assert snapshot.operation.mnemonic == "INC"
        assert snapshot.metadata.step_count == 1
        assert cpu.get_state() is snapshot.state

    # @intent:test_case_halt 末尾を超えたstepは何も実行しないSnapshotを返すことを検証します。
    def test_halt_returns_empty_snapshot(self):
        cpu = FakeCpu()
        cpu.step("INC")
        snapshot = cpu.step("INC")
        assert snapshot.operation is None
        assert snapshot.error is None
        assert snapshot.metadata.step_count == 1

    # @intent:test_case_trap_output 出力はSnapshotと共有のトラップログの両方に記録されることを検証します。
    def test_trap_output_goes_to_log(self):
        cpu = FakeCpu()
        source = "INC\nOUT"
        cpu.step(source)
        snapshot = cpu.step(source)
        assert snapshot.trap_output == ["1"]
        assert cpu.get_trap_log().messages() == ["1"]

    # @intent:test_case_execute_error 実行時エラーでは状態もログも変更されないことを検証します。
    def test_execute_error_is_atomic(self):
        cpu = FakeCpu()
        snapshot = cpu.step("BAD")
        assert snapshot.error == Z16Error("boom")
        assert snapshot.trap_output == []
        assert cpu.get_state() == MachineState()
        assert cpu.get_trap_log().messages() == []
        assert snapshot.metadata.step_count == 0

    def test_decode_error(self):
        cpu = FakeCpu()
        snapshot = cpu.step("NOPE")
        assert isinstance(snapshot.error, DecodeError)
        assert snapshot.error.pc == 0

    def test_restore_state(self):
        cpu = FakeCpu()
        cpu.restore_state(MachineState(pc=1))
        cpu.step("OUT\nINC")
        assert cpu.get_state().registers[0] == 1

    # @intent:test_case_reset resetで初期状態とステップ数が戻ることを検証します。
    def test_reset(self):
        cpu = FakeCpu()
        cpu.step("INC")
        cpu.reset()
        assert cpu.get_state() == MachineState()
        assert cpu.step("INC").metadata.step_count == 1
