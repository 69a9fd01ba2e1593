# src/retro_chip8/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。

実行関数が呼ばれる時点で、PCは既に次の命令（フェッチ元 + 2）を指しています。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.memory import AddressSpace
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Chip8Io, skip_if

# --- 00EE RET ---
# @intent:responsibility スタックからCALL命令のアドレスを取り出し、その次の命令へ戻ります。
def execute_ret(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.pc = (state.pop() + 2) & 0xFFFF

# --- 1NNN JP addr ---
def execute_jp(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.pc = op.nnn

# --- 2NNN CALL addr ---
# @intent:responsibility CALL命令自身のアドレス（PC加算前の値）をスタックに積み、NNNへジャンプします。
def execute_call(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.push(op.address)
    state.pc = op.nnn

# --- 3XNN SE Vx, byte ---
def execute_se_byte(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    skip_if(state, state.v[op.x] == op.nn)

# --- 4XNN SNE Vx, byte ---
def execute_sne_byte(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    skip_if(state, state.v[op.x] != op.nn)

# --- 5XY0 SE Vx, Vy ---
def execute_se_reg(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    skip_if(state, state.v[op.x] == state.v[op.y])

# --- 9XY0 SNE Vx, Vy ---
def execute_sne_reg(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    skip_if(state, state.v[op.x] != state.v[op.y])

# --- BNNN JP V0, addr ---
# @intent:rationale 加算結果は0xFFFを超えうるが切り詰めない。範囲外なら次のフェッチでAddressOutOfRangeになる。
def execute_jp_v0(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    state.pc = op.nnn + state.v[0]

# --- EX9E SKP Vx ---
def execute_skp(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    skip_if(state, io.keypad.is_pressed(state.v[op.x]))

# --- EXA1 SKNP Vx ---
def execute_sknp(state: Chip8CpuState, bus: AddressSpace, io: Chip8Io, op: Operation) -> None:
    skip_if(state, not io.keypad.is_pressed(state.v[op.x]))
