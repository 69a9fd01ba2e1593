"""
Display View モジュール。

フレームバッファの読み取り専用スナップショットを、指定倍率で拡大して描画します。
"""
from typing import Optional, Tuple

from PySide6.QtWidgets import QWidget
from PySide6.QtCore import QSize
from PySide6.QtGui import QPainter, QColor, QPaintEvent

from retro_chip8.arch.chip8.machine import Chip8Machine
from retro_chip8.arch.chip8.framebuffer import WIDTH, HEIGHT
from retro_chip8.config.models import DisplayConfig

Frame = Tuple[Tuple[bool, ...], ...]

# @intent:responsibility 仮想マシンの画面を表示するウィジェットを提供します。
class DisplayView(QWidget):
    """
    64x32の画面をscale倍で描画するウィジェット。
    再描画フラグが立っている場合のみスナップショットを取り直します。
    """
    def __init__(self, display_config: Optional[DisplayConfig] = None, parent=None):
        super().__init__(parent)
        self._config = display_config or DisplayConfig()
        self._machine: Optional[Chip8Machine] = None
        self._frame: Frame = tuple(tuple(False for _ in range(WIDTH)) for _ in range(HEIGHT))
        self.setFixedSize(self.sizeHint())

    def set_machine(self, machine: Chip8Machine) -> None:
        self._machine = machine
        self.refresh()

    def sizeHint(self) -> QSize:
        return QSize(WIDTH * self._config.scale, HEIGHT * self._config.scale)

    # @intent:responsibility 再描画が必要ならフレームを取り込み、ウィジェットの更新を予約します。
    # @intent:return 画面を取り込んだ場合はTrue。
    def refresh(self) -> bool:
        if self._machine is None or not self._machine.is_redraw_owed():
            return False
        self._frame = self._machine.framebuffer_snapshot()
        self.update()
        return True

    def frame(self) -> Frame:
        return self._frame

    def paintEvent(self, event: QPaintEvent):
        scale = self._config.scale
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(self._config.background))
        foreground = QColor(self._config.foreground)
        for y, row in enumerate(self._frame):
            for x, lit in enumerate(row):
                if lit:
                    painter.fillRect(x * scale, y * scale, scale, scale, foreground)
        painter.end()
