# z16_tracer/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、マシン状態の管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional, List

from z16_tracer.core.errors import Z16Error
from z16_tracer.core.snapshot import Snapshot, Operation, Metadata
from z16_tracer.core.state import MachineState
from z16_tracer.core.trap_log import TrapLog
from z16_tracer.common.types import RegisterMap, RegisterLayoutInfo

logger = logging.getLogger(__name__)

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    全てのCPUエミュレーションの基底となる抽象クラス。
    ソーステキストからのフェッチ、状態管理、命令サイクルの抽象化を提供します。
    """
    # @intent:responsibility マシン状態とトラップログへの参照を初期化します。
    # @intent:pre-condition `trap_log`を省略した場合はCPU専用のログが生成されます。
    def __init__(self, trap_log: Optional[TrapLog] = None):
        self._state: MachineState = self._create_initial_state()
        self._step_count: int = 0
        self._trap_log = trap_log if trap_log is not None else TrapLog()
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility 初期状態のMachineStateオブジェクトを生成します。
    @abstractmethod
    def _create_initial_state(self) -> MachineState:
        """
        マシンの初期状態を生成して返します。
        """
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    # @intent:rationale トラップログの所有者はホストであるため、ここではクリアしません。
    def reset(self) -> None:
        """
        全レジスタを0、PCを0に戻します。
        """
        self._state = self._create_initial_state()
        self._step_count = 0
        logger.info("CPU reset")

    # @intent:responsibility 現在のマシンの状態を返します。
    def get_state(self) -> MachineState:
        return self._state

    # @intent:responsibility 指定された状態を復元します。Debuggerのステップバックで使用されます。
    def restore_state(self, state: MachineState) -> None:
        self._state = state

    def get_trap_log(self) -> TrapLog:
        return self._trap_log

    # @intent:responsibility ソーステキストから実行可能行の列を取り出します。
    @abstractmethod
    def _fetch_program(self, program_text: str) -> List[str]:
        """
        ソーステキストを実行可能行（空行・コメント行を除いた行）のリストに変換します。
        PCはこのリストのインデックスです。
        """
        pass

    # @intent:responsibility 1行のテキストを解析し、Operationオブジェクトに変換します。
    # @intent:post-condition 解析できない場合はZ16Errorを送出し、状態には触れません。
    @abstractmethod
    def _decode(self, line: str, pc: int) -> Operation:
        pass

    # @intent:responsibility デコードされた命令を実行し、新しい状態を返します。
    @abstractmethod
    def _execute(self, operation: Operation, state: MachineState, trap_output: List[str]) -> MachineState:
        """
        デコードされた命令を実行し、更新後のMachineStateを返します。
        ECALLなどの出力は`trap_output`に追記します。
        """
        pass

    # @intent:responsibility CPUを1命令進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー（フェッチ→デコード→PC更新→実行→Snapshot生成）を定義します。
    #                  エラーは例外として内部で送出され、ここで捕捉してSnapshotに載せて返します。
    def step(self, program_text: str) -> Snapshot:
        """
        ソーステキストの現在のPC位置にある命令を1つ実行し、Snapshotを返します。
        エラー時は状態を変更せず、Snapshot.errorにエラーを格納します。
        """
        initial_pc = self._state.pc

        # 1. フェッチ（毎回ソースから再解析する）
        lines = self._fetch_program(program_text)

        # 2. 終端判定 (Hook)
        halt_snapshot = self._handle_halt(initial_pc, lines)
        if halt_snapshot:
            return halt_snapshot

        line = lines[initial_pc]
        trap_output: List[str] = []
        try:
            # 3. デコード
            operation = self._decode(line, initial_pc)
            logger.debug("Executing instruction at PC %d: %s", initial_pc, line)

            # 4. PC更新 (Hook) と実行
            next_state = self._update_pc(self._state)
            new_state = self._execute(operation, next_state, trap_output)
        except Z16Error as e:
            logger.warning("%s", e)
            return self._create_snapshot(None, error=e)

        # 5. 後処理 & Snapshot生成
        self._state = new_state
        for message in trap_output:
            self._trap_log.append(message)
        self._step_count += 1
        return self._create_snapshot(operation, trap_output=trap_output)

    # @intent:responsibility 現在のソースに含まれる実行可能行の数を返します。
    def instruction_count(self, program_text: str) -> int:
        return len(self._fetch_program(program_text))

    # @intent:responsibility PCが実行可能行の末尾を超えているか（これ以上実行する命令がないか）を返します。
    def is_finished(self, program_text: str) -> bool:
        return self._state.pc >= self.instruction_count(program_text)

    # @intent:responsibility PCが実行可能行の末尾を超えている場合の処理を行います。
    # @intent:return 終端に達していれば何も実行しなかったSnapshot、そうでなければNone。
    def _handle_halt(self, current_pc: int, lines: List[str]) -> Optional[Snapshot]:
        if current_pc >= len(lines):
            return self._create_snapshot(None)
        return None

    # @intent:responsibility 命令実行前にPCを更新します。
    def _update_pc(self, state: MachineState) -> MachineState:
        """
        命令実行前のPC更新。デフォルトは1命令分進める。
        分岐命令は実行時にPCを明示的に上書きします。
        """
        return state.replace(pc=state.pc + 1)

    # @intent:responsibility スナップショットを生成します。
    def _create_snapshot(self, operation: Optional[Operation], trap_output: Optional[List[str]] = None,
                         error: Optional[Z16Error] = None) -> Snapshot:
        symbol_info = None
        if operation is not None:
            symbol_info = f"{operation.address}: {operation.text()}"

        return Snapshot(
            state=self.get_state(), # MachineStateは不変なので、そのまま保持して安全
            operation=operation,
            metadata=Metadata(step_count=self._step_count, symbol_info=symbol_info),
            trap_output=list(trap_output or []),
            error=error
        )

    @abstractmethod
    def get_register_map(self) -> RegisterMap:
        """
        現在のレジスタ値を辞書形式で返す。
        UIがCPUの内部構造を知らなくても値を表示できるようにするために使用される。
        """
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        """
        レジスタをUI上でどのように配置・グループ化すべきかの定義を返す。
        """
        pass
