# tests/core/test_cpu.py
"""
retro_chip8.core.cpuモジュールの単体テスト。
AbstractCpuのテンプレートメソッド（step）の共通フローを、最小限のCPU実装で検証します。
"""
from dataclasses import dataclass
from typing import Dict, List

import pytest

from retro_chip8.transport.bus import Bus, RAM, BusAccessType
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.state import CpuState
from retro_chip8.core.snapshot import Operation, Snapshot, StepStatus
from retro_chip8.core.errors import AddressOutOfRange
from retro_chip8.common.types import RegisterInfo, RegisterLayoutInfo


@dataclass
class ToyState(CpuState):
    acc: int = 0


class ToyCpu(AbstractCpu):
    """1バイト命令のCPU。0x01はACCを1増やすINC、それ以外はNOP。"""

    def _create_initial_state(self) -> ToyState:
        return ToyState()

    def _fetch(self) -> int:
        return self._bus.read(self._state.pc)

    def _decode(self, opcode: int) -> Operation:
        mnemonic = "INC" if opcode == 0x01 else "NOP"
        return Operation(opcode=opcode, address=self._state.pc, pattern=mnemonic,
                         mnemonic=mnemonic, length=1)

    def _execute(self, operation: Operation) -> StepStatus:
        if operation.mnemonic == "INC":
            self._state.acc += 1
        return StepStatus.EXECUTED

    def get_register_map(self) -> Dict[str, int]:
        return {"PC": self._state.pc, "ACC": self._state.acc}

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [RegisterLayoutInfo("Main", [RegisterInfo("PC", 16), RegisterInfo("ACC", 8)])]

# @intent:test_suite AbstractCpuの命令サイクル、スナップショット、例外への文脈付与を検証します。

class TestAbstractCpu:

    @pytest.fixture
    def setup_cpu(self):
        bus = Bus()
        ram = RAM(0x10)
        bus.register_device(0x0000, 0x000F, ram)
        cpu = ToyCpu(bus)
        return cpu, bus

    def test_cannot_instantiate_abstract_cpu(self):
        with pytest.raises(TypeError):
            AbstractCpu(Bus())

    # @intent:test_case_step step()がPCを進め、実行結果のスナップショットを返すことを検証します。
    def test_step_returns_snapshot(self, setup_cpu):
        cpu, bus = setup_cpu
        bus.write(0x0000, 0x01)
        bus.get_and_clear_activity_log()

        snapshot = cpu.step()

        assert isinstance(snapshot, Snapshot)
        assert snapshot.status is StepStatus.EXECUTED
        assert snapshot.advanced
        assert snapshot.operation.mnemonic == "INC"
        assert snapshot.state.pc == 0x0001
        assert snapshot.state.acc == 1
        assert snapshot.metadata.step_count == 1
        assert snapshot.metadata.trace == "0x0000: 0001 INC"
        assert [(a.address, a.access_type) for a in snapshot.bus_activity] == [(0x0000, BusAccessType.READ)]

    # @intent:test_case_immutability スナップショットの状態はその後の実行で変化しないことを検証します。
    def test_snapshot_state_is_a_copy(self, setup_cpu):
        cpu, bus = setup_cpu
        bus.write(0x0000, 0x01)
        bus.write(0x0001, 0x01)

        first = cpu.step()
        cpu.step()

        assert first.state.acc == 1
        assert cpu.get_state().acc == 2
        assert cpu.step_count == 2

    def test_reset_restores_initial_state(self, setup_cpu):
        cpu, bus = setup_cpu
        bus.write(0x0000, 0x01)
        cpu.step()

        cpu.reset()

        assert cpu.get_state().pc == 0
        assert cpu.get_state().acc == 0
        assert cpu.step_count == 0

    # @intent:test_case_fault 範囲外フェッチの例外に、実行しようとしたPCが付与されることを検証します。
    def test_fault_carries_pc_context(self, setup_cpu):
        cpu, _ = setup_cpu
        cpu.get_state().pc = 0x0010

        with pytest.raises(AddressOutOfRange) as excinfo:
            cpu.step()

        assert excinfo.value.pc == 0x0010
        assert excinfo.value.opcode is None
        assert "PC=0x0010" in str(excinfo.value)
