# tests/arch/chip8/test_instructions_load.py
"""
ロード/ストア命令の単体テスト。
"""
import pytest

from retro_chip8.core.snapshot import StepStatus
from retro_chip8.core.errors import AddressOutOfRange
from retro_chip8.arch.chip8.font import glyph_address

# @intent:test_suite レジスタ、メモリ、タイマ、キー入力に関わるロード命令を検証します。

def test_ld_byte_and_reg(run_program, machine):
    run_program(0x6A42, 0x8BA0)
    state = machine.get_state()
    assert state.v[0xA] == 0x42
    assert state.v[0xB] == 0x42


# @intent:test_case_wrap VF以外の全てのレジスタについて、7XNN(NN=1)を2回実行するとVXが2増えることを検証します。
def test_add_byte_twice(machine, assemble):
    opcodes = []
    for x in range(0xF):
        opcodes += [0x7001 | (x << 8)] * 2
    machine.load_program(assemble(*opcodes))
    state = machine.get_state()
    for x in range(0xF):
        state.v[x] = 255 if x == 0 else x

    for _ in opcodes:
        machine.step()

    assert state.v[0] == 1 # 255 + 2 は256で折り返す
    assert state.v[1:0xF] == [x + 2 for x in range(1, 0xF)]
    assert state.vf == 0


def test_ld_i(run_program, machine):
    run_program(0xA123)
    assert machine.get_state().i == 0x123


def test_bcd(run_program, machine):
    run_program(0x60FE, 0xA300, 0xF033) # V0 = 254
    assert [machine.memory.read_byte(0x300 + k) for k in range(3)] == [2, 5, 4]


# @intent:test_case_round_trip FX55とFX65でV0..VXが復元され、Iが同じだけ進むことを検証します。
def test_store_then_load_round_trip(machine, assemble):
    machine.load_program(assemble(0xA400, 0xF555, 0xA400, 0xF565))
    state = machine.get_state()
    machine.step()
    stored = [0x11 * (k + 1) for k in range(6)]
    state.v[:6] = stored
    state.v[6] = 0x99

    machine.step()
    assert state.i == 0x406
    assert [machine.memory.read_byte(0x400 + k) for k in range(6)] == stored
    assert machine.memory.read_byte(0x406) == 0 # V6は書き込まれない

    state.v[:7] = [0] * 7
    machine.step()
    machine.step()
    assert state.v[:6] == stored
    assert state.v[6] == 0
    assert state.i == 0x406


# @intent:test_case_atomic_store 範囲外にかかるFX55は何も書き込まず、IとPCも変更しないことを検証します。
def test_store_out_of_range_is_atomic(machine, assemble):
    machine.load_program(assemble(0xAFFE, 0x6001, 0x6102, 0xF255))
    for _ in range(3):
        machine.step()
    with pytest.raises(AddressOutOfRange) as excinfo:
        machine.step()
    state = machine.get_state()
    assert excinfo.value.address == 0x1000
    assert excinfo.value.pc == 0x206
    assert machine.memory.read_byte(0xFFE) == 0
    assert machine.memory.read_byte(0xFFF) == 0
    assert state.i == 0xFFE
    assert state.pc == 0x206


def test_load_out_of_range_is_atomic(machine, assemble):
    machine.load_program(assemble(0xAFFE, 0xF265))
    machine.memory.load(0xFFE, 0x77)
    state = machine.get_state()
    state.v[0] = 0x11
    machine.step()
    with pytest.raises(AddressOutOfRange):
        machine.step()
    assert state.v[0] == 0x11
    assert state.i == 0xFFE


def test_bcd_out_of_range_is_atomic(machine, assemble):
    machine.load_program(assemble(0x60FE, 0xAFFF, 0xF033))
    machine.step()
    machine.step()
    with pytest.raises(AddressOutOfRange) as excinfo:
        machine.step()
    assert excinfo.value.address == 0x1000
    assert machine.memory.read_byte(0xFFF) == 0


def test_ld_f(run_program, machine):
    run_program(0x630B, 0xF329)
    assert machine.get_state().i == glyph_address(0xB)


def test_timers_load_and_read(run_program, machine):
    run_program(0x6005, 0xF015, 0xF118, 0xF207)
    assert machine.timers.delay == 5
    assert machine.timers.sound == 0
    assert machine.get_state().v[2] == 5


# @intent:test_case_key_wait キーが押されるまでFX0AでPCが進まず、押された回だけ1回進むことを検証します。
def test_wait_for_key(machine, assemble):
    machine.load_program(assemble(0xF30A))
    state = machine.get_state()

    for _ in range(5):
        snapshot = machine.step()
        assert snapshot.status is StepStatus.WAITING_FOR_KEY
        assert not snapshot.advanced
        assert state.pc == 0x200

    machine.set_key(0x7, True)
    snapshot = machine.step()
    assert snapshot.status is StepStatus.EXECUTED
    assert state.pc == 0x202
    assert state.v[3] == 0x7
