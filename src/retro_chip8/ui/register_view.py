# src/retro_chip8/ui/register_view.py
"""
レジスタとタイマの値を表示するドックウィジェット。
CPUが返すレイアウト記述子からグループごとの表を組み立てます。
"""
from typing import Dict, Optional
from PySide6.QtWidgets import QWidget, QVBoxLayout, QGridLayout, QLabel, QGroupBox
from PySide6.QtCore import Qt
from PySide6.QtGui import QFontDatabase

from retro_chip8.core.cpu import AbstractCpu

COLUMNS = 2
VALUE_STYLE = "font-family: '{family}', monospace; color: #7CFC00;"

# @intent:responsibility 16本のVレジスタと I/PC/SP/DT/ST を2列の表で表示します。
class RegisterView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self._value_style = VALUE_STYLE.format(
            family=QFontDatabase.systemFont(QFontDatabase.FixedFont).family()
        )
        self._layout = QVBoxLayout(self)
        self._labels: Dict[str, QLabel] = {}
        self._digits: Dict[str, int] = {}
        self._cpu: Optional[AbstractCpu] = None

    def set_cpu(self, cpu: AbstractCpu) -> None:
        self._cpu = cpu
        self._rebuild()
        self.update_registers()

    # @intent:responsibility 既存の欄を破棄し、レイアウト記述子から作り直します。
    def _rebuild(self):
        while self._layout.count():
            item = self._layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self._labels.clear()
        self._digits.clear()

        for group in self._cpu.get_register_layout():
            box = QGroupBox(group.group_name)
            grid = QGridLayout(box)
            for position, reg in enumerate(group.registers):
                row, column = divmod(position, COLUMNS)
                value = QLabel()
                value.setStyleSheet(self._value_style)
                value.setAlignment(Qt.AlignRight)
                grid.addWidget(QLabel(reg.name), row, column * 2)
                grid.addWidget(value, row, column * 2 + 1)
                self._labels[reg.name] = value
                self._digits[reg.name] = (reg.width + 3) // 4
            self._layout.addWidget(box)
        self._layout.addStretch()

    def update_registers(self):
        if self._cpu is None:
            return
        for name, value in self._cpu.get_register_map().items():
            label = self._labels.get(name)
            if label is not None:
                label.setText(f"0x{value:0{self._digits[name]}X}")

    def value_text(self, name: str) -> str:
        return self._labels[name].text()
