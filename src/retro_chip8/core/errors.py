# retro_chip8/core/errors.py
"""
Core Layer (エラー分類)

仮想マシンが送出する例外の階層を定義します。
プロセスを終了させる代わりに型付きの例外を送出し、停止・リセット・継続の判断はドライバに委ねます。
"""
from typing import Optional


# @intent:responsibility 本パッケージが送出する全ての例外の基底クラスです。
class Chip8Error(Exception):
    pass


# @intent:responsibility プログラムがアドレス空間のプログラム領域に収まらないことを表します。
# @intent:rationale ロード時の回復可能なエラー。呼び出し元は実行に進んではなりません。
class ProgramTooLarge(Chip8Error, ValueError):
    def __init__(self, size: int, capacity: int):
        super().__init__(f"The program is too big: {size} bytes (capacity {capacity} bytes).")
        self.size = size
        self.capacity = capacity


# @intent:responsibility 実行中の不正状態（プログラムまたはインタプリタの欠陥）を表す基底クラスです。
class Chip8Fault(Chip8Error):
    """
    step()のハードストップを表す例外。
    どの命令で発生したかを示す診断情報（PC、オペコード）を保持します。
    """
    def __init__(self, message: str, pc: Optional[int] = None, opcode: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.pc = pc
        self.opcode = opcode

    # @intent:responsibility 実行中の命令の情報を後から付与します。
    # @intent:rationale バスは命令を知らないため、CPUが例外を捕捉した時点で文脈を補います。
    def attach_context(self, pc: int, opcode: Optional[int]) -> None:
        if self.pc is None:
            self.pc = pc
        if self.opcode is None:
            self.opcode = opcode

    def __str__(self) -> str:
        context = []
        if self.pc is not None:
            context.append(f"PC={self.pc:#06x}")
        if self.opcode is not None:
            context.append(f"opcode={self.opcode:04X}")
        if context:
            return f"{self.message} ({', '.join(context)})"
        return self.message


class AddressOutOfRange(Chip8Fault, IndexError):
    def __init__(self, address: int, pc: Optional[int] = None, opcode: Optional[int] = None):
        super().__init__(f"Address {address:#06x} not mapped to any device.", pc, opcode)
        self.address = address


class StackOverflow(Chip8Fault):
    pass


class StackUnderflow(Chip8Fault):
    pass
