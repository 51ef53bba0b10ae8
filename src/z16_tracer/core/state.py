# z16_tracer/core/state.py
"""
Core Layer (マシン状態)

このモジュールは、Z16マシンの状態（レジスタファイルとプログラムカウンタ）を保持するデータ構造を定義します。
"""
from dataclasses import dataclass, field, replace
from typing import Tuple

from z16_tracer.common.word import to_signed

REGISTER_COUNT = 8
LINK_REGISTER = 7

# @intent:responsibility マシンのレジスタ状態を不変の値として保持します。
# @intent:rationale 状態は命令ごとに新しいインスタンスとして生成され、Snapshotに安全に保持できます。
@dataclass(frozen=True)
class MachineState:
    """
    Z16マシンの状態。

    registers: 8本の汎用レジスタ。各値は符号付き32ビット（2の補数）で保持します。
    pc: 実行可能行のインデックス（バイトアドレスではない）。
    """
    registers: Tuple[int, ...] = field(default_factory=lambda: (0,) * REGISTER_COUNT)
    pc: int = 0

    def __post_init__(self):
        if len(self.registers) != REGISTER_COUNT:
            raise ValueError(f"MachineState requires {REGISTER_COUNT} registers, got {len(self.registers)}")
        if self.pc < 0:
            raise ValueError(f"PC must not be negative: {self.pc}")
        # リストで渡された場合もタプルに正規化し、値を32ビットに収める
        object.__setattr__(self, "registers", tuple(to_signed(v) for v in self.registers))

    # @intent:responsibility dataclasses.replaceのラッパー。
    def replace(self, **changes) -> 'MachineState':
        return replace(self, **changes)

    # @intent:responsibility 指定レジスタのみを書き換えた新しい状態を返します。
    def with_register(self, index: int, value: int) -> 'MachineState':
        regs = list(self.registers)
        regs[index] = to_signed(value)
        return self.replace(registers=tuple(regs))
