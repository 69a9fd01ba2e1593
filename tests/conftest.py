import os

import pytest

from retro_chip8.arch.chip8.machine import Chip8Machine

# ウィジェットのテストをディスプレイなしで実行する
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def words(*opcodes: int) -> bytes:
    """16bit命令の並びをビッグエンディアンのバイト列にする。"""
    data = bytearray()
    for opcode in opcodes:
        data += opcode.to_bytes(2, "big")
    return bytes(data)


@pytest.fixture
def machine():
    return Chip8Machine(seed=1234)


@pytest.fixture
def run_program(machine):
    """命令列をロードし、指定回数stepする。"""
    def _run(*opcodes: int, steps: int = None):
        machine.load_program(words(*opcodes))
        snapshots = []
        for _ in range(len(opcodes) if steps is None else steps):
            snapshots.append(machine.step())
        return snapshots
    return _run


@pytest.fixture
def assemble():
    return words
