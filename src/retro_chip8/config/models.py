from dataclasses import dataclass, field
from typing import Optional

from retro_chip8.common.types import KeyMap

# 1 2 3 C / 4 5 6 D / 7 8 9 E / A 0 B F をAZERTY配列の左側4x4に割り当てる
DEFAULT_KEYMAP: KeyMap = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "a": 0x4, "z": 0x5, "e": 0x6, "r": 0xD,
    "q": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
    "w": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
}

@dataclass
class TimingConfig:
    steps_per_tick: int = 10  # 10命令/フレーム => 600Hz
    tick_hz: int = 60

@dataclass
class DisplayConfig:
    scale: int = 10
    foreground: str = "#000000"
    background: str = "#FFFFFF"

@dataclass
class MachineConfig:
    program: Optional[str] = None
    seed: Optional[int] = None
    timing: TimingConfig = field(default_factory=TimingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    keymap: KeyMap = field(default_factory=lambda: dict(DEFAULT_KEYMAP))
