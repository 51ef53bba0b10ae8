# src/z16_tracer/arch/z16/cpu.py
"""
Z16 CPUエミュレーションの中心モジュール。
"""
from typing import List, Optional, Sequence

from z16_tracer.core.cpu import AbstractCpu
from z16_tracer.core.snapshot import Operation, Snapshot
from z16_tracer.core.state import MachineState, REGISTER_COUNT
from z16_tracer.core.trap_log import TrapLog
from z16_tracer.common.types import RegisterMap, RegisterLayoutInfo, RegisterInfo
from z16_tracer.arch.z16.decoder import executable_lines
from z16_tracer.arch.z16.instructions import decode_line, execute_instruction
from z16_tracer.arch.z16.instructions.base import DEFAULT_REGISTER_PREFIXES

# @intent:responsibility Z16 CPUの具体的なエミュレーションロジックを提供する。
class Z16Cpu(AbstractCpu):
    """
    Z16 CPUをエミュレートするクラス。

    命令はバイト列ではなくソーステキストから毎ステップ再解析されます。
    実行中にソースを編集すると、次のフェッチから新しい内容が使われます。
    """
    def __init__(self, trap_log: Optional[TrapLog] = None,
                 register_prefixes: Sequence[str] = DEFAULT_REGISTER_PREFIXES):
        self._register_prefixes = tuple(register_prefixes)
        super().__init__(trap_log)

    # @intent:responsibility 全レジスタ0、PC=0の初期状態を生成する。
    def _create_initial_state(self) -> MachineState:
        return MachineState()

    def _fetch_program(self, program_text: str) -> List[str]:
        return executable_lines(program_text)

    def _decode(self, line: str, pc: int) -> Operation:
        return decode_line(line, pc, self._register_prefixes)

    def _execute(self, operation: Operation, state: MachineState, trap_output: List[str]) -> MachineState:
        return execute_instruction(operation, state, trap_output)

    # @intent:responsibility リセットしてから1命令だけ実行します。
    # @intent:rationale 「Run」は完了までのループではなく、リセット＋1ステップと同等です。
    #                  完了までの連続実行はDebugger.run()として別に提供します。
    def run_from_start(self, program_text: str) -> Snapshot:
        self.reset()
        return self.step(program_text)

    # @intent:responsibility レジスタマップ（UI表示用）を返す。
    def get_register_map(self) -> RegisterMap:
        state = self.get_state()
        reg_map = {f"x{i}": state.registers[i] for i in range(REGISTER_COUNT)}
        reg_map["PC"] = state.pc
        return reg_map

    # @intent:responsibility レジスタレイアウト定義を返す。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"x{i}", 32) for i in range(REGISTER_COUNT)]),
            RegisterLayoutInfo("Control", [RegisterInfo("PC", 32)])
        ]
