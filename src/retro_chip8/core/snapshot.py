# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令の実行結果（デコード済み命令、CPU状態、バスアクセス）を記録した
不変のデータ構造を定義します。ドライバやUIへの情報提供と、デバッグ時の状態記録に用います。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from retro_chip8.core.state import CpuState
from retro_chip8.transport.bus import BusAccess


# @intent:responsibility デコードされた1命令を表すタグ付きの値です。
# @intent:rationale ビットフィールドの切り出しをここに集約し、実行関数はフィールド名だけを参照します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令（16bitオペコード、フェッチ元アドレス、パターン、ニーモニック）を記録するデータクラス。
    """
    opcode: int # 例: 0x8124
    address: int # フェッチ元のPC
    pattern: str # 例: "8XY4"（実行テーブルのキー）
    mnemonic: str # 例: "ADD"
    operands: List[str] = field(default_factory=list) # 例: ["V1", "V2"]
    length: int = 2 # 命令のバイト長

    @property
    def x(self) -> int:
        return (self.opcode & 0x0F00) >> 8

    @property
    def y(self) -> int:
        return (self.opcode & 0x00F0) >> 4

    @property
    def n(self) -> int:
        return self.opcode & 0x000F

    @property
    def nn(self) -> int:
        return self.opcode & 0x00FF

    @property
    def nnn(self) -> int:
        return self.opcode & 0x0FFF

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    # @intent:responsibility トレース表示用の1行表現を返します。
    def describe(self) -> str:
        text = self.mnemonic
        if self.operands:
            text += " " + ", ".join(self.operands)
        return text


# @intent:responsibility step()が前進したかどうかをドライバに伝えます。
class StepStatus(Enum):
    EXECUTED = "EXECUTED"                 # 命令を実行し、PCが前進または分岐した
    WAITING_FOR_KEY = "WAITING_FOR_KEY"   # FX0Aでキー入力待ち。PCは変化しない
    UNKNOWN_OPCODE = "UNKNOWN_OPCODE"     # 未定義命令。NOPとして扱いPCを2進めた


# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計ステップ数、トレース文字列）を記録するデータクラス。
    """
    step_count: int
    trace: Optional[str] = None # 例: "0x0200: 6A02 LD VA, #02"


# @intent:responsibility ある一時点におけるCPUとバスの状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    1命令の実行結果を記録した不変のデータ構造。
    stateには実行直後のレジスタ状態のコピーが格納されます。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    status: StepStatus = StepStatus.EXECUTED
    bus_activity: List[BusAccess] = field(default_factory=list)

    @property
    def advanced(self) -> bool:
        return self.status is not StepStatus.WAITING_FOR_KEY
