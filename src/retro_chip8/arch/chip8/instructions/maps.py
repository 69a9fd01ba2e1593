# src/retro_chip8/arch/chip8/instructions/maps.py
"""
オペコードと命令実装のマッピング定義。

デコードは (上位ニブル, 下位ニブル/下位バイト) の組による構造化された照合です。
    1. 上位ニブルで命令ファミリを選ぶ
    2. ファミリごとのマスクで取り出した値からパターン（例: "8XY4"）を選ぶ
"""
from . import load
from . import alu
from . import control
from . import display

# @intent:map 上位ニブルから (バリアント選択マスク, マスク値→パターン) へのマッピングテーブル。
DECODE_MAP = {
    0x0: (0xFFFF, {0x00E0: "00E0", 0x00EE: "00EE"}),
    0x1: (0x0000, {0x0: "1NNN"}),
    0x2: (0x0000, {0x0: "2NNN"}),
    0x3: (0x0000, {0x0: "3XNN"}),
    0x4: (0x0000, {0x0: "4XNN"}),
    0x5: (0x000F, {0x0: "5XY0"}),
    0x6: (0x0000, {0x0: "6XNN"}),
    0x7: (0x0000, {0x0: "7XNN"}),
    0x8: (0x000F, {
        0x0: "8XY0", 0x1: "8XY1", 0x2: "8XY2", 0x3: "8XY3",
        0x4: "8XY4", 0x5: "8XY5", 0x6: "8XY6", 0x7: "8XY7",
        0xE: "8XYE",
    }),
    0x9: (0x000F, {0x0: "9XY0"}),
    0xA: (0x0000, {0x0: "ANNN"}),
    0xB: (0x0000, {0x0: "BNNN"}),
    0xC: (0x0000, {0x0: "CXNN"}),
    0xD: (0x0000, {0x0: "DXYN"}),
    0xE: (0x00FF, {0x9E: "EX9E", 0xA1: "EXA1"}),
    0xF: (0x00FF, {
        0x07: "FX07", 0x0A: "FX0A", 0x15: "FX15", 0x18: "FX18",
        0x1E: "FX1E", 0x29: "FX29", 0x33: "FX33", 0x55: "FX55",
        0x65: "FX65",
    }),
}

# @intent:map パターンから (ニーモニック, オペランド書式) へのマッピングテーブル。
# 書式は x, y, n, nn, nnn をキーワードとして format されます。
MNEMONIC_MAP = {
    "00E0": ("CLS", ""),
    "00EE": ("RET", ""),
    "1NNN": ("JP", "${nnn:03X}"),
    "2NNN": ("CALL", "${nnn:03X}"),
    "3XNN": ("SE", "V{x:X}, #{nn:02X}"),
    "4XNN": ("SNE", "V{x:X}, #{nn:02X}"),
    "5XY0": ("SE", "V{x:X}, V{y:X}"),
    "6XNN": ("LD", "V{x:X}, #{nn:02X}"),
    "7XNN": ("ADD", "V{x:X}, #{nn:02X}"),
    "8XY0": ("LD", "V{x:X}, V{y:X}"),
    "8XY1": ("OR", "V{x:X}, V{y:X}"),
    "8XY2": ("AND", "V{x:X}, V{y:X}"),
    "8XY3": ("XOR", "V{x:X}, V{y:X}"),
    "8XY4": ("ADD", "V{x:X}, V{y:X}"),
    "8XY5": ("SUB", "V{x:X}, V{y:X}"),
    "8XY6": ("SHR", "V{x:X}"),
    "8XY7": ("SUBN", "V{x:X}, V{y:X}"),
    "8XYE": ("SHL", "V{x:X}"),
    "9XY0": ("SNE", "V{x:X}, V{y:X}"),
    "ANNN": ("LD", "I, ${nnn:03X}"),
    "BNNN": ("JP", "V0, ${nnn:03X}"),
    "CXNN": ("RND", "V{x:X}, #{nn:02X}"),
    "DXYN": ("DRW", "V{x:X}, V{y:X}, {n}"),
    "EX9E": ("SKP", "V{x:X}"),
    "EXA1": ("SKNP", "V{x:X}"),
    "FX07": ("LD", "V{x:X}, DT"),
    "FX0A": ("LD", "V{x:X}, K"),
    "FX15": ("LD", "DT, V{x:X}"),
    "FX18": ("LD", "ST, V{x:X}"),
    "FX1E": ("ADD", "I, V{x:X}"),
    "FX29": ("LD", "F, V{x:X}"),
    "FX33": ("LD", "B, V{x:X}"),
    "FX55": ("LD", "[I], V{x:X}"),
    "FX65": ("LD", "V{x:X}, [I]"),
}

# @intent:map パターンから実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Display
    "00E0": display.execute_cls,
    "DXYN": display.execute_drw,

    # Control
    "00EE": control.execute_ret,
    "1NNN": control.execute_jp,
    "2NNN": control.execute_call,
    "3XNN": control.execute_se_byte,
    "4XNN": control.execute_sne_byte,
    "5XY0": control.execute_se_reg,
    "9XY0": control.execute_sne_reg,
    "BNNN": control.execute_jp_v0,
    "EX9E": control.execute_skp,
    "EXA1": control.execute_sknp,

    # Load/Store
    "6XNN": load.execute_ld_byte,
    "8XY0": load.execute_ld_reg,
    "ANNN": load.execute_ld_i,
    "FX07": load.execute_ld_vx_dt,
    "FX0A": load.execute_ld_vx_k,
    "FX15": load.execute_ld_dt_vx,
    "FX18": load.execute_ld_st_vx,
    "FX29": load.execute_ld_f,
    "FX33": load.execute_ld_bcd,
    "FX55": load.execute_store_regs,
    "FX65": load.execute_load_regs,

    # ALU
    "7XNN": alu.execute_add_byte,
    "8XY1": alu.execute_or,
    "8XY2": alu.execute_and,
    "8XY3": alu.execute_xor,
    "8XY4": alu.execute_add_reg,
    "8XY5": alu.execute_sub,
    "8XY6": alu.execute_shr,
    "8XY7": alu.execute_subn,
    "8XYE": alu.execute_shl,
    "CXNN": alu.execute_rnd,
    "FX1E": alu.execute_add_i,
}
