# src/retro_chip8/arch/chip8/machine.py
"""
CHIP-8 仮想マシン。

アドレス空間、CPU、フレームバッファ、キーパッド、タイマを1つのインスタンスが所有し、
ドライバ（GUIやテスト）に対して狭いインターフェースだけを公開します。
呼び出しはシングルスレッドで直列化されている前提で、内部で同期は行いません。
"""
from typing import List, Optional, Tuple
import random

from retro_chip8.core.snapshot import Snapshot
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.memory import AddressSpace
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.framebuffer import Framebuffer
from retro_chip8.arch.chip8.keypad import Keypad
from retro_chip8.arch.chip8.timers import Timers
from retro_chip8.arch.chip8.instructions.base import Chip8Io

DEFAULT_STEPS_PER_TICK = 10

# @intent:responsibility VMの全状態を所有し、step/tick/入出力の問い合わせを提供します。
class Chip8Machine:
    """
    1つのCHIP-8仮想マシン。
    seedを指定するとCXNNの乱数列が再現可能になります。
    """
    def __init__(self, seed: Optional[int] = None):
        self.memory = AddressSpace()
        self.io = Chip8Io(rng=random.Random(seed))
        self.cpu = Chip8Cpu(self.memory, self.io)

    @property
    def framebuffer(self) -> Framebuffer:
        return self.io.framebuffer

    @property
    def keypad(self) -> Keypad:
        return self.io.keypad

    @property
    def timers(self) -> Timers:
        return self.io.timers

    def get_state(self) -> Chip8CpuState:
        return self.cpu.get_state()

    # @intent:responsibility プログラムをロードし、実行開始状態（PC=0x200）に戻します。
    # @intent:post-condition ProgramTooLargeの場合はマシンの状態を一切変更しません。
    def load_program(self, data: bytes) -> None:
        self.memory.load_program(data)
        self.cpu.reset()
        self.framebuffer.clear()
        self.timers.reset()

    # @intent:responsibility 1命令を実行します（FX0Aのキー待ち中は同じ命令を再試行します）。
    def step(self) -> Snapshot:
        return self.cpu.step()

    # @intent:responsibility タイマを1単位進めます。ビープのエッジが発生したかを返します。
    def tick(self) -> bool:
        return self.timers.tick()

    # @intent:responsibility ドライバの既定ポリシー「N命令実行してから1tick」を1フレーム分行います。
    # @intent:rationale キー待ちで前進しないステップが出たら、そのフレームの残りの命令は実行しません。
    def run_frame(self, steps_per_tick: int = DEFAULT_STEPS_PER_TICK) -> List[Snapshot]:
        """
        最大steps_per_tick命令を実行し、最後にtick()を1回呼び出します。
        実行中の不正状態（Chip8Fault）はそのまま送出され、tickは行われません。
        """
        snapshots = []
        for _ in range(steps_per_tick):
            snapshot = self.step()
            snapshots.append(snapshot)
            if not snapshot.advanced:
                break
        self.tick()
        return snapshots

    def set_key(self, index: int, pressed: bool) -> None:
        self.keypad.set_key(index, pressed)

    def is_redraw_owed(self) -> bool:
        return self.framebuffer.is_redraw_owed()

    def pixel_at(self, x: int, y: int) -> bool:
        return self.framebuffer.pixel_at(x, y)

    def framebuffer_snapshot(self) -> Tuple[Tuple[bool, ...], ...]:
        return self.framebuffer.snapshot()

    def on_beep_edge(self) -> bool:
        return self.timers.on_beep_edge()

    # @intent:responsibility 電源投入直後の状態に戻します（フォントは保持し、プログラムは消去）。
    def reset(self) -> None:
        self.memory.clear()
        self.cpu.reset()
        self.framebuffer.clear()
        self.keypad.release_all()
        self.timers.reset()
