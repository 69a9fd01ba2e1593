# retro_chip8/core/cpu.py
"""
Core Layer (命令サイクル)

1命令分の処理（フェッチ → デコード → PC前進 → 実行）の順序をここで固定し、
各段階の中身はアーキテクチャ側のサブクラスが埋めます。
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
import copy
import logging

from retro_chip8.transport.bus import Bus
from retro_chip8.core.errors import Chip8Fault
from retro_chip8.core.snapshot import Snapshot, Operation, Metadata, StepStatus
from retro_chip8.core.state import CpuState
from retro_chip8.common.types import RegisterLayoutInfo

logger = logging.getLogger(__name__)


# @intent:responsibility 命令サイクルの骨格と、状態の保存・復元・リセットを提供します。
class AbstractCpu(ABC):
    """
    命令サイクルを駆動する抽象CPU。

    サブクラスが実装するもの:
        _create_initial_state  電源投入直後のレジスタ
        _fetch / _decode       PCの位置の命令を読み、Operationにする
        _execute               Operationを適用し、StepStatusを返す
        get_register_map / get_register_layout  UI向けのレジスタ情報
    """
    def __init__(self, bus: Bus):
        self._bus = bus
        self._state: CpuState = self._create_initial_state()
        self._step_count = 0

    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        pass

    @abstractmethod
    def _fetch(self) -> int:
        pass

    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    @abstractmethod
    def _execute(self, operation: Operation) -> StepStatus:
        pass

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        pass

    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._step_count = 0

    # 実行中の状態そのもの（コピーではない）を返します。
    def get_state(self) -> CpuState:
        return self._state

    @property
    def step_count(self) -> int:
        return self._step_count

    # @intent:responsibility 1命令を実行し、実行直後の状態を記録したSnapshotを返します。
    # @intent:post-condition Chip8Faultの場合、PCをフェッチ元に戻し、そのPCとオペコードを付与して再送出します。
    def step(self) -> Snapshot:
        self._bus.get_and_clear_activity_log()
        fetched_at = self._state.pc
        opcode: Optional[int] = None
        try:
            opcode = self._fetch()
            operation = self._decode(opcode)
            # 実行関数からは、PCが既に次の命令を指しているように見える
            self._state.pc = (self._state.pc + operation.length) & 0xFFFF
            status = self._execute(operation)
        except Chip8Fault as fault:
            # PCは失敗した命令を指したまま残す
            self._state.pc = fetched_at
            fault.attach_context(fetched_at, opcode)
            raise

        self._step_count += 1
        trace = f"{operation.address:#06x}: {operation.opcode_hex} {operation.describe()}"
        logger.debug(trace)
        return Snapshot(
            state=copy.deepcopy(self._state),
            operation=operation,
            metadata=Metadata(step_count=self._step_count, trace=trace),
            status=status,
            bus_activity=self._bus.get_and_clear_activity_log(),
        )
