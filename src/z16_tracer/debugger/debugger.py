# z16_tracer/debugger/debugger.py
"""
デバッガモジュール。

コアエンジンの実行を制御し、ユーザーが指定した条件（ブレークポイント）で
実行を中断させる責務を負います。
"""
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional, Tuple

from z16_tracer.core.cpu import AbstractCpu
from z16_tracer.core.snapshot import Snapshot
from z16_tracer.core.state import MachineState

logger = logging.getLogger(__name__)

DEFAULT_MAX_RUN_STEPS = 10000
DEFAULT_HISTORY_LIMIT = 1000

# @intent:responsibility ブレークポイントの条件タイプを定義します。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # プログラムカウンタが特定の命令番号に一致
    REGISTER_VALUE = "REGISTER_VALUE"   # 特定のレジスタが特定の値になった
    REGISTER_CHANGE = "REGISTER_CHANGE" # 特定のレジスタの値が変化した

# @intent:responsibility ブレークポイントをトリガーする条件を定義します。
@dataclass(frozen=True)
class BreakpointCondition:
    """
    ブレークポイントがヒットするための条件を定義するデータクラス。
    register_nameはレジスタマップのキー（"x0"〜"x7", "PC"）です。
    """
    condition_type: BreakpointConditionType
    value: Optional[int] = None           # PC_MATCH, REGISTER_VALUEで使用
    register_name: Optional[str] = None   # REGISTER_VALUE, REGISTER_CHANGEで使用
    enabled: bool = True                  # 有効/無効状態

    # @intent:rationale ブレークポイント条件は、一度設定したら変更されないため、不変にします（frozen=True）。

# @intent:responsibility 連続実行が停止した理由を定義します。
class StopReason(Enum):
    FINISHED = "FINISHED"       # PCが最後の実行可能行を超えた
    BREAKPOINT = "BREAKPOINT"
    ERROR = "ERROR"             # デコードエラー
    STOPPED = "STOPPED"         # stop()による中断
    STEP_LIMIT = "STEP_LIMIT"   # 最大ステップ数に到達

# @intent:responsibility 連続実行の結果を記録します。
@dataclass(frozen=True)
class RunResult:
    reason: StopReason
    snapshot: Optional[Snapshot]
    steps: int

# @intent:responsibility レジスタマップのキーからMachineStateの値を読み出します。
def _read_register(state: MachineState, name: str) -> Optional[int]:
    key = name.strip().lower()
    if key == "pc":
        return state.pc
    if key.startswith("x") and key[1:].isdigit():
        index = int(key[1:])
        if index < len(state.registers):
            return state.registers[index]
    return None

# @intent:responsibility コアエンジンの実行制御とブレークポイント管理を行います。
class Debugger:
    """
    CPUの実行を制御し、ブレークポイントと実行履歴の管理を行うクラス。
    """
    def __init__(self, cpu: AbstractCpu, max_run_steps: int = DEFAULT_MAX_RUN_STEPS,
                 history_limit: int = DEFAULT_HISTORY_LIMIT):
        self._cpu = cpu
        self._max_run_steps = max_run_steps
        self._breakpoints: List[BreakpointCondition] = []
        self._running: bool = False
        self._stop_requested: bool = False
        self._run_prepared: bool = False
        self._previous_state: MachineState = self._cpu.get_state()
        self._last_snapshot: Optional[Snapshot] = None
        # @intent:responsibility 実行履歴を保持し、ステップバックをサポートします。
        # @intent:rationale 長時間の連続実行でも履歴が際限なく増えないよう、古いものから捨てます。
        self._history: Deque[Snapshot] = deque(maxlen=history_limit)
        # 各履歴エントリに対応する「実行前の状態」と「実行前のトラップログ件数」
        self._undo_stack: Deque[Tuple[MachineState, int]] = deque(maxlen=history_limit)

    @property
    def cpu(self) -> AbstractCpu:
        return self._cpu

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        """
        ブレークポイント条件を追加します。
        """
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    def update_breakpoint(self, old_condition: BreakpointCondition, new_condition: BreakpointCondition) -> None:
        """
        既存のブレークポイントを更新します。
        """
        if old_condition in self._breakpoints:
            idx = self._breakpoints.index(old_condition)
            self._breakpoints[idx] = new_condition

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        """
        ブレークポイント条件を削除します。
        """
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    def get_history(self) -> List[Snapshot]:
        """
        現在の実行履歴を返します。
        """
        return list(self._history)

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    def is_running(self) -> bool:
        return self._running

    def _pc_breakpoint_hit(self, pc: int) -> bool:
        for bp in self._breakpoints:
            if bp.enabled and bp.condition_type == BreakpointConditionType.PC_MATCH and bp.value == pc:
                return True
        return False

    def _check_other_breakpoints(self, snapshot: Snapshot) -> bool:
        """
        Snapshotに基づいてPC_MATCH以外のブレークポイントをチェックします。
        """
        current_state = snapshot.state

        for bp in self._breakpoints:
            if not bp.enabled or not bp.register_name:
                continue

            if bp.condition_type == BreakpointConditionType.REGISTER_VALUE:
                if _read_register(current_state, bp.register_name) == bp.value:
                    return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_CHANGE:
                current = _read_register(current_state, bp.register_name)
                previous = _read_register(self._previous_state, bp.register_name)
                if current is not None and current != previous:
                    return True
        return False

    # @intent:responsibility CPUとデバッガの履歴、およびトラップログを初期状態に戻します。
    def reset(self) -> None:
        self._cpu.reset()
        self._cpu.get_trap_log().clear()
        self._history.clear()
        self._undo_stack.clear()
        self._last_snapshot = None
        self._previous_state = self._cpu.get_state()

    def step_instruction(self, program_text: str) -> Snapshot:
        """
        CPUを1命令分実行し、その結果のSnapshotを返します。
        実際に命令が実行された場合のみ履歴に追加します。
        """
        self._previous_state = self._cpu.get_state()
        trap_length = len(self._cpu.get_trap_log())
        snapshot = self._cpu.step(program_text)
        self._last_snapshot = snapshot

        if snapshot.executed:
            self._history.append(snapshot)
            self._undo_stack.append((self._previous_state, trap_length))

        return snapshot

    # @intent:responsibility リセット後に1命令だけ実行します（「Run」ボタンの動作）。
    def run_from_start(self, program_text: str) -> Snapshot:
        self.reset()
        return self.step_instruction(program_text)

    def step_back(self) -> Optional[Snapshot]:
        """
        実行履歴を1つ戻り、マシン状態とトラップログを復元します。
        戻った先の時点のSnapshotを返します。履歴の先頭まで戻った場合はNoneを返します。
        """
        if not self._history:
            return None

        self._history.pop()
        previous_state, trap_length = self._undo_stack.pop()
        self._cpu.restore_state(previous_state)
        self._cpu.get_trap_log().truncate(trap_length)

        if self._history:
            self._last_snapshot = self._history[-1]
        else:
            self._last_snapshot = None
        return self._last_snapshot

    # @intent:responsibility 連続実行の開始を呼び出し側のスレッドで予約します。
    # @intent:rationale runをワーカースレッドで開始する場合、スレッドが走り出す前のstop()を取りこぼさないよう、
    #                  停止要求のクリアはここで行い、run側では上書きしません。
    def prepare_run(self) -> None:
        self._stop_requested = False
        self._run_prepared = True
        self._running = True

    def run(self, program_text: str, max_steps: Optional[int] = None) -> RunResult:
        """
        停止条件（終端、エラー、ブレークポイント、stop()、最大ステップ数）に達するまでCPUの実行を継続します。
        現在のPCにあるブレークポイントでは停止せず、最初の1命令は必ず実行します。
        """
        if not self._run_prepared:
            self._stop_requested = False
        self._run_prepared = False
        self._running = True

        limit = self._max_run_steps if max_steps is None else max_steps
        steps = 0
        reason = StopReason.STOPPED

        while not self._stop_requested:
            pc = self._cpu.get_state().pc
            if steps > 0 and self._pc_breakpoint_hit(pc):
                logger.info("Breakpoint hit at PC: %d", pc)
                reason = StopReason.BREAKPOINT
                break

            if self._cpu.is_finished(program_text):
                logger.info("Program finished at PC: %d", pc)
                reason = StopReason.FINISHED
                break

            if steps >= limit:
                logger.info("Step limit reached after %d steps", steps)
                reason = StopReason.STEP_LIMIT
                break

            snapshot = self.step_instruction(program_text)
            if snapshot.error is not None:
                reason = StopReason.ERROR
                break

            steps += 1
            if self._check_other_breakpoints(snapshot):
                logger.info("Breakpoint hit at PC: %d", snapshot.state.pc)
                reason = StopReason.BREAKPOINT
                break

        self._running = False
        return RunResult(reason=reason, snapshot=self._last_snapshot, steps=steps)

    # @intent:responsibility 連続実行の停止を要求します。次の命令の前で停止します。
    def stop(self) -> None:
        self._stop_requested = True
        self._running = False
