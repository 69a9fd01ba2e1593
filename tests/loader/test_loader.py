# tests/loader/test_loader.py
"""
retro_chip8.loader.loaderモジュールの単体テスト。
生バイナリのROMファイルのロード機能を検証します。
"""
import pytest

from retro_chip8.arch.chip8.machine import Chip8Machine
from retro_chip8.loader.loader import BinaryLoader
from retro_chip8.core.errors import ProgramTooLarge

# @intent:test_suite ROMローダー機能の検証。

class TestBinaryLoader:

    @pytest.fixture
    def setup_loader(self, tmp_path):
        return BinaryLoader(), Chip8Machine(), tmp_path

    def test_load_binary(self, setup_loader):
        loader, machine, tmp_path = setup_loader
        rom = tmp_path / "prog.ch8"
        rom.write_bytes(bytes([0x12, 0x34, 0xAB]))

        size = loader.load_binary(str(rom), machine)

        assert size == 3
        assert machine.memory.read_byte(0x200) == 0x12
        assert machine.memory.read_byte(0x201) == 0x34
        assert machine.memory.read_byte(0x202) == 0xAB
        assert machine.get_state().pc == 0x200

    def test_load_empty_file(self, setup_loader):
        loader, machine, tmp_path = setup_loader
        rom = tmp_path / "empty.ch8"
        rom.write_bytes(b"")
        assert loader.load_binary(str(rom), machine) == 0

    # @intent:test_case_too_large サイズ超過のファイルは拒否され、以前のプログラムが残ることを検証します。
    def test_load_too_large(self, setup_loader):
        loader, machine, tmp_path = setup_loader
        machine.load_program(bytes([0x00, 0xE0]))
        rom = tmp_path / "big.ch8"
        rom.write_bytes(bytes([0xFF]) * 3585)

        with pytest.raises(ProgramTooLarge):
            loader.load_binary(str(rom), machine)
        assert machine.memory.read_byte(0x201) == 0xE0

    def test_file_not_found(self, setup_loader):
        loader, machine, tmp_path = setup_loader
        with pytest.raises(FileNotFoundError):
            loader.load_binary(str(tmp_path / "missing.ch8"), machine)
