# retro_chip8/loader/loader.py
"""
プログラムローダーモジュール。
CHIP-8のROMファイル（命令ワードを並べただけの生バイナリ）のロードをサポートします。
"""
from pathlib import Path

from retro_chip8.arch.chip8.machine import Chip8Machine

class BinaryLoader:
    """
    生バイナリのROMファイルを読み込み、仮想マシンのプログラム領域にロードするローダー。
    """
    # @intent:post-condition 3584バイトを超えるファイルはProgramTooLargeとなり、マシンは変更されません。
    def load_binary(self, file_path: str, machine: Chip8Machine) -> int:
        data = Path(file_path).read_bytes()
        machine.load_program(data)
        return len(data)
