# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
from dataclasses import dataclass, field
import random

from retro_chip8.arch.chip8.framebuffer import Framebuffer
from retro_chip8.arch.chip8.keypad import Keypad
from retro_chip8.arch.chip8.timers import Timers
from retro_chip8.arch.chip8.state import Chip8CpuState

# @intent:data_structure 命令から参照されるメモリ以外の周辺装置をまとめます。
# @intent:rationale 実行関数のシグネチャを (state, bus, io, op) に揃え、周辺装置の追加でシグネチャが変わらないようにします。
@dataclass
class Chip8Io:
    framebuffer: Framebuffer = field(default_factory=Framebuffer)
    keypad: Keypad = field(default_factory=Keypad)
    timers: Timers = field(default_factory=Timers)
    rng: random.Random = field(default_factory=random.Random)

    # @intent:utility_function 0-255の一様乱数を1バイト返します。
    def random_byte(self) -> int:
        return self.rng.randrange(0x100)

# @intent:utility_function 条件が成立した場合に次の命令をスキップします。
# @intent:pre-condition PCは既に命令長(2)分進められていること。スキップ時は合計で+4になります。
def skip_if(state: Chip8CpuState, condition: bool) -> None:
    if condition:
        state.pc = (state.pc + 2) & 0xFFFF
