# z16_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1ステップ実行後のマシン状態と実行された命令を記録した不変のデータ構造を定義します。
UIへの情報提供と、デバッグ時の状態記録に用いる責務を負います。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from z16_tracer.core.state import MachineState
from z16_tracer.core.errors import Z16Error


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令の詳細（オペコード、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode: Enum # 例: Opcode.ADD
    mnemonic: str # 例: "ADD"
    operands: Tuple[str, ...] = () # 例: ("x2", "x0")
    args: Tuple[int, ...] = () # 解釈済みのオペランド（レジスタ番号または即値）
    address: int = 0 # フェッチ元のPC（実行可能行のインデックス）
    source: str = "" # コメント除去済みの行テキスト

    # @intent:responsibility 表示用のアセンブリ表記を返します。
    def text(self) -> str:
        if self.operands:
            return f"{self.mnemonic} " + ", ".join(self.operands)
        return self.mnemonic

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計ステップ数、表示用の命令情報など）を記録するデータクラス。
    """
    step_count: int
    symbol_info: Optional[str] = None # 例: "3: ADD x2, x0"

# @intent:responsibility ある一時点におけるマシンの完全な状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    1ステップ実行後のマシン状態を記録した不変のデータ構造。

    operationがNoneの場合は何も実行されなかった（PCが末尾を超えている、またはエラー）ことを示します。
    """
    state: MachineState
    operation: Optional[Operation]
    metadata: Metadata
    trap_output: List[str] = field(default_factory=list)
    error: Optional[Z16Error] = None

    @property
    def executed(self) -> bool:
        return self.operation is not None and self.error is None
