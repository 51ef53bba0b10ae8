from typing import Tuple

from z16_tracer.core.trap_log import TrapLog
from z16_tracer.arch.z16.cpu import Z16Cpu
from z16_tracer.debugger.debugger import Debugger
from .models import SystemConfig, InitialState

# @intent:responsibility システム構成（Config）に基づいて、CPU、Debugger、トラップログを生成・接続し、初期状態を適用します。
class SystemBuilder:
    def build_system(self, config: SystemConfig) -> Tuple[Z16Cpu, Debugger, TrapLog]:
        trap_log = TrapLog()
        cpu = Z16Cpu(trap_log, register_prefixes=config.engine.register_prefixes)
        debugger = Debugger(cpu, max_run_steps=config.debugger.max_run_steps,
                            history_limit=config.debugger.history_limit)

        # 初期状態の適用
        self.apply_initial_state(cpu, config.initial_state)

        return cpu, debugger, trap_log

    # @intent:responsibility Configで定義された初期状態をCPUに適用します。
    def apply_initial_state(self, cpu: Z16Cpu, config_state: InitialState) -> None:
        """
        CPUをリセットし、Configから指定された初期値（PC、レジスタ）を適用します。
        """
        cpu.reset()
        state = cpu.get_state().replace(pc=config_state.pc)
        for reg_name, value in config_state.registers.items():
            state = state.with_register(int(reg_name[1:]), value)
        cpu.restore_state(state)
