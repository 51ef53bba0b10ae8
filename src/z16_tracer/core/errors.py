# src/z16_tracer/core/errors.py
"""
Core Layer (エラー定義)

1ステップの実行中に発生し得るエラーを定義します。
いずれも致命的ではなく、CPUはSnapshotを通じて呼び出し元に報告し、状態は変更しません。
"""
from typing import Optional

# @intent:responsibility シミュレータ固有のエラーの基底クラス。
class Z16Error(Exception):
    """
    1行の命令を処理する際に発生したエラー。
    どの命令（PCと行テキスト）で発生したかを保持します。
    """
    def __init__(self, message: str, pc: Optional[int] = None, line: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.pc = pc
        self.line = line

    def __str__(self) -> str:
        if self.pc is None:
            return self.message
        return f"PC {self.pc}: {self.message} ({self.line})"

    # 同一の行テキストに対して同一のエラーが再現されることを比較可能にする。
    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return (self.message, self.pc, self.line) == (other.message, other.pc, other.line)

    def __hash__(self) -> int:
        return hash((type(self), self.message, self.pc, self.line))

# @intent:responsibility オペランドの個数や形式が命令と一致しない場合のエラー。
class DecodeError(Z16Error):
    pass

# @intent:responsibility ニーモニックが命令表に存在しない場合のエラー。
# @intent:rationale 「認識できないニーモニック」はデコードエラーの一種でもあるため、DecodeErrorを継承します。
class UnknownOpcodeError(DecodeError):
    pass
