# src/retro_chip8/arch/chip8/instructions/display.py
"""
画面命令（消去、スプライト描画）の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.memory import AddressSpace
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Chip8Io

# --- 00E0 CLS ---
def execute_cls(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    io.framebuffer.clear()

# --- DXYN DRW Vx, Vy, nibble ---
# @intent:responsibility メモリ[I..I+N)のNバイトのスプライトを(Vx, Vy)にXOR描画し、衝突をVFに格納します。
def execute_drw(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    x = state.v[op.x]
    y = state.v[op.y]
    rows = [bus.read(state.i + r) for r in range(op.n)]
    state.vf = 0
    if io.framebuffer.draw_sprite(x, y, rows):
        state.vf = 1
