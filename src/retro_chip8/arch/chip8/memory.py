# src/retro_chip8/arch/chip8/memory.py
"""
CHIP-8のアドレス空間。

4KBの空間を3つのデバイスに分割してバスに登録します。
    0x000-0x04F  フォントROM（構築時に一度だけ書き込まれる）
    0x050-0x1FF  インタプリタ領域（RAM）
    0x200-0xFFF  プログラム領域（RAM）
範囲外のアクセスはバスがAddressOutOfRangeとして送出します。
"""
import logging

from retro_chip8.transport.bus import Bus, RAM, ROM
from retro_chip8.core.errors import ProgramTooLarge
from retro_chip8.arch.chip8.font import FONT_BASE, FONT_SET
from retro_chip8.arch.chip8.state import PROGRAM_START

logger = logging.getLogger(__name__)

MEMORY_SIZE = 0x1000
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START  # 3584 bytes

# @intent:responsibility CHIP-8のメモリマップを構築し、プログラムのロードを提供します。
class AddressSpace(Bus):
    """
    フォントテーブルとプログラム領域を備えた4096バイトのアドレス空間。
    """
    def __init__(self):
        super().__init__()
        font_end = FONT_BASE + len(FONT_SET) - 1
        self._font_rom = ROM(len(FONT_SET))
        self._work_ram = RAM(PROGRAM_START - font_end - 1)
        self._program_ram = RAM(MEMORY_SIZE - PROGRAM_START)

        self.register_device(FONT_BASE, font_end, self._font_rom)
        self.register_device(font_end + 1, PROGRAM_START - 1, self._work_ram)
        self.register_device(PROGRAM_START, MEMORY_SIZE - 1, self._program_ram)

        for offset, data in enumerate(FONT_SET):
            self._font_rom.load_data(offset, data)

    # バイト単位アクセスの別名（read/writeと同じ）
    read_byte = Bus.read
    write_byte = Bus.write

    # @intent:responsibility ビッグエンディアンの16bitワード（命令）を読み出します。
    def read_word(self, address: int) -> int:
        return (self.read(address) << 8) | self.read(address + 1)

    # @intent:responsibility プログラムのバイト列を0x200から配置します。
    # @intent:pre-condition len(data) <= 3584。超過時はProgramTooLargeを送出し、メモリは変更しません。
    def load_program(self, data: bytes) -> None:
        """
        プログラム領域をクリアしてから、バイト列を0x200以降にコピーします。
        フォントROMとインタプリタ領域は変更しません。
        """
        if len(data) > MAX_PROGRAM_SIZE:
            raise ProgramTooLarge(len(data), MAX_PROGRAM_SIZE)

        self._program_ram.clear()
        for offset, byte in enumerate(data):
            self.load(PROGRAM_START + offset, byte)
        logger.info("Loaded program: %d bytes at %#06x", len(data), PROGRAM_START)

    # @intent:responsibility フォント以外の領域をゼロクリアします。
    def clear(self) -> None:
        self._work_ram.clear()
        self._program_ram.clear()
        self.get_and_clear_activity_log()
