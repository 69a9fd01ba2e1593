# src/retro_chip8/arch/chip8/instructions/alu.py
"""
算術・論理命令の実装。

VFへのフラグ書き込みの順序は命令ごとに異なります。
    8XY4, FX1E      : 結果を書いた後にVFを書く
    8XY5/6/7/E      : VFを先に書き、その後のレジスタ値で結果を計算する
XまたはYがFのときだけ差が現れます。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.memory import AddressSpace
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Chip8Io

# --- 7XNN ADD Vx, byte --- (フラグは変更しない)
def execute_add_byte(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.v[op.x] = (state.v[op.x] + op.nn) & 0xFF

# --- 8XY1 OR Vx, Vy ---
def execute_or(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.v[op.x] |= state.v[op.y]

# --- 8XY2 AND Vx, Vy ---
def execute_and(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.v[op.x] &= state.v[op.y]

# --- 8XY3 XOR Vx, Vy ---
def execute_xor(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.v[op.x] ^= state.v[op.y]

# --- 8XY4 ADD Vx, Vy ---
# @intent:responsibility 切り詰め前の和からキャリーを求め、結果を書いた後にVFへ格納します。
def execute_add_reg(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    total = state.v[op.x] + state.v[op.y]
    state.v[op.x] = total & 0xFF
    state.vf = 1 if total > 0xFF else 0

# --- 8XY5 SUB Vx, Vy ---
# @intent:responsibility VF=1は「ボローなし」を意味します。
def execute_sub(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.vf = 1 if state.v[op.x] >= state.v[op.y] else 0
    state.v[op.x] = (state.v[op.x] - state.v[op.y]) & 0xFF

# --- 8XY6 SHR Vx ---
def execute_shr(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.vf = state.v[op.x] & 0x1
    state.v[op.x] >>= 1

# --- 8XY7 SUBN Vx, Vy ---
def execute_subn(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.vf = 1 if state.v[op.y] >= state.v[op.x] else 0
    state.v[op.x] = (state.v[op.y] - state.v[op.x]) & 0xFF

# --- 8XYE SHL Vx ---
def execute_shl(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.vf = state.v[op.x] >> 7
    state.v[op.x] = (state.v[op.x] << 1) & 0xFF

# --- CXNN RND Vx, byte ---
def execute_rnd(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.v[op.x] = io.random_byte() & op.nn

# --- FX1E ADD I, Vx ---
# @intent:responsibility 和が0xFFFを超えた場合にVF=1とします。Iは16bitとして保持します。
def execute_add_i(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    total = state.i + state.v[op.x]
    state.i = total & 0xFFFF
    state.vf = 1 if total > 0xFFF else 0
