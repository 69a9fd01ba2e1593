# src/retro_chip8/arch/chip8/timers.py
"""
遅延タイマとサウンドタイマ。

どちらも8bitのダウンカウンタで、ドライバが一定周期（通常60Hz）でtick()を呼び出します。
"""
import logging

logger = logging.getLogger(__name__)

# @intent:responsibility 2つのタイマと、サウンドタイマの1→0遷移（ビープのエッジ）を管理します。
class Timers:
    def __init__(self):
        self.delay = 0
        self.sound = 0
        self._beep_edge = False

    def set_delay(self, value: int) -> None:
        self.delay = value & 0xFF

    def set_sound(self, value: int) -> None:
        self.sound = value & 0xFF

    # @intent:responsibility 両タイマを1ずつ減算します（0で止まる）。
    # @intent:post-condition サウンドタイマが1から0になったtickでのみbeep_edgeがTrueになります。
    def tick(self) -> bool:
        self._beep_edge = False
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            if self.sound == 1:
                self._beep_edge = True
                logger.info("BEEP")
            self.sound -= 1
        return self._beep_edge

    # @intent:responsibility 直近のtickでビープのエッジが発生したかを返します（読み取りで消費しない）。
    def on_beep_edge(self) -> bool:
        return self._beep_edge

    def reset(self) -> None:
        self.delay = 0
        self.sound = 0
        self._beep_edge = False
