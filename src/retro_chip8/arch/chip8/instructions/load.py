# src/retro_chip8/arch/chip8/instructions/load.py
"""
ロード/ストア命令（レジスタ、Iレジスタ、タイマ、メモリ転送）の実装。
"""
from typing import Optional

from retro_chip8.core.snapshot import Operation, StepStatus
from retro_chip8.arch.chip8.memory import AddressSpace
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.font import glyph_address
from .base import Chip8Io

# --- 6XNN LD Vx, byte ---
def execute_ld_byte(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.v[op.x] = op.nn

# --- 8XY0 LD Vx, Vy ---
def execute_ld_reg(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.v[op.x] = state.v[op.y]

# --- ANNN LD I, addr ---
def execute_ld_i(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.i = op.nnn

# --- FX07 LD Vx, DT ---
def execute_ld_vx_dt(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.v[op.x] = io.timers.delay

# --- FX0A LD Vx, K ---
# @intent:responsibility キーが押されるまで同じ命令に留まります。
# @intent:post-condition キーが押されていなければPCをフェッチ元に戻し、WAITING_FOR_KEYを返します。
def execute_ld_vx_k(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> Optional[StepStatus]:
    key = io.keypad.pressed_key()
    if key is None:
        state.pc = op.address
        return StepStatus.WAITING_FOR_KEY
    state.v[op.x] = key
    return None

# --- FX15 LD DT, Vx ---
def execute_ld_dt_vx(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    io.timers.set_delay(state.v[op.x])

# --- FX18 LD ST, Vx ---
def execute_ld_st_vx(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    io.timers.set_sound(state.v[op.x])

# --- FX29 LD F, Vx ---
def execute_ld_f(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.i = glyph_address(state.v[op.x])

# --- FX33 LD B, Vx ---
# @intent:responsibility VxのBCD表現（百の位、十の位、一の位）をI, I+1, I+2に格納します。
# @intent:pre-condition I..I+2が全てマップされていること。範囲外なら何も書かずにAddressOutOfRangeを送出します。
def execute_ld_bcd(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    value = state.v[op.x]
    bus.check_mapped(state.i, 3)
    bus.write(state.i, value // 100)
    bus.write(state.i + 1, (value // 10) % 10)
    bus.write(state.i + 2, value % 10)

# --- FX55 LD [I], Vx ---
# @intent:post-condition V0..Vx（Vxを含む）を書き込み、IをX+1進めます。範囲外ならメモリもIも変更しません。
def execute_store_regs(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    bus.check_mapped(state.i, op.x + 1)
    for index in range(op.x + 1):
        bus.write(state.i + index, state.v[index])
    state.i = (state.i + op.x + 1) & 0xFFFF

# --- FX65 LD Vx, [I] ---
def execute_load_regs(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    bus.check_mapped(state.i, op.x + 1)
    for index in range(op.x + 1):
        state.v[index] = bus.read(state.i + index)
    state.i = (state.i + op.x + 1) & 0xFFFF
