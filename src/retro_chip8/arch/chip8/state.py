# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義（レジスタファイル）。
"""
from dataclasses import dataclass, field
from typing import List

from retro_chip8.core.state import CpuState
from retro_chip8.core.errors import StackOverflow, StackUnderflow

# @intent:constant レジスタファイルの構成を定義します。
REGISTER_COUNT = 16
STACK_DEPTH = 16
PROGRAM_START = 0x200
VF = 0xF  # フラグとして流用される汎用レジスタ

# @intent:responsibility CHIP-8の全てのレジスタ（V0-VF, I, PC, SP）とコールスタックを保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。
    spはスタックの次の空きスロットのインデックス(0-16)です。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)  # V0-VF (8bit)
    i: int = 0x0000  # Address Register (16bit storage, 12bit effective)
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)

    @property
    def vf(self) -> int:
        return self.v[VF]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[VF] = value & 0xFF

    # @intent:responsibility 戻りアドレスをスタックに積みます。
    # @intent:pre-condition sp < STACK_DEPTH。満杯の場合はStackOverflowを送出します。
    def push(self, address: int) -> None:
        if self.sp >= STACK_DEPTH:
            raise StackOverflow(f"Call stack overflow: {STACK_DEPTH} levels already in use.")
        self.stack[self.sp] = address & 0xFFFF
        self.sp += 1

    # @intent:pre-condition sp > 0。空の場合はStackUnderflowを送出します。
    def pop(self) -> int:
        if self.sp <= 0:
            raise StackUnderflow("Return with an empty call stack.")
        self.sp -= 1
        return self.stack[self.sp]
