# src/retro_chip8/arch/chip8/font.py
"""
16進数字(0-F)の組み込みフォント。

各グリフは幅4ピクセル・高さ5行で、1行を1バイトの上位4ビットで表します。
例: "7"
    0xF0 1111 ****
    0x10 0001    *
    0x20 0010   *
    0x40 0100  *
    0x40 0100  *
"""

FONT_BASE = 0x000
GLYPH_HEIGHT = 5

FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0, # 0
    0x20, 0x60, 0x20, 0x20, 0x70, # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0, # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0, # 3
    0x90, 0x90, 0xF0, 0x10, 0x10, # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0, # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0, # 6
    0xF0, 0x10, 0x20, 0x40, 0x40, # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0, # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0, # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90, # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0, # B
    0xF0, 0x80, 0x80, 0x80, 0xF0, # C
    0xE0, 0x90, 0x90, 0x90, 0xE0, # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0, # E
    0xF0, 0x80, 0xF0, 0x80, 0x80, # F
])


def glyph_address(digit: int) -> int:
    """下位ニブルの数字に対応するグリフの先頭アドレスを返す。"""
    return FONT_BASE + GLYPH_HEIGHT * (digit & 0xF)
