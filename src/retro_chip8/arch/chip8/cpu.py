# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール（インタプリタ）。
"""
from typing import Dict, List
from retro_chip8.core.snapshot import Operation, StepStatus
from retro_chip8.common.types import RegisterLayoutInfo, RegisterInfo
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.arch.chip8.state import Chip8CpuState, REGISTER_COUNT
from retro_chip8.arch.chip8.memory import AddressSpace
from retro_chip8.arch.chip8.instructions import decode_opcode, execute_instruction
from retro_chip8.arch.chip8.instructions.base import Chip8Io

# @intent:responsibility CHIP-8の具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 CPUをエミュレートするクラス。
    状態は「次の命令を実行可能」の1つだけで、FX0Aのキー待ちのみ同じ命令を再実行します。
    """
    def __init__(self, bus: AddressSpace, io: Chip8Io):
        super().__init__(bus)
        self._io = io

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility PCからビッグエンディアンの16bit命令をフェッチします。
    def _fetch(self) -> int:
        return self._bus.read_word(self._state.pc)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode, self._state.pc)

    def _execute(self, operation: Operation) -> StepStatus:
        return execute_instruction(operation, self._state, self._bus, self._io)

    # @intent:responsibility UI表示用に、現在のレジスタ値とタイマ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{index:X}": s.v[index] for index in range(REGISTER_COUNT)}
        registers.update({
            "I": s.i, "PC": s.pc, "SP": s.sp,
            "DT": self._io.timers.delay, "ST": self._io.timers.sound,
        })
        return registers

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [
                RegisterInfo(f"V{index:X}", 8) for index in range(REGISTER_COUNT)
            ]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]
