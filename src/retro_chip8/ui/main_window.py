# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
仮想マシンのドライバ（フレームタイマ）、キー入力、画面表示、レジスタ表示を組み立てます。
"""
from typing import Optional
import logging

from PySide6.QtWidgets import QMainWindow, QApplication, QDockWidget, QToolBar, QFileDialog, QMessageBox
from PySide6.QtGui import QAction, QCloseEvent, QKeyEvent
from PySide6.QtCore import Qt, QTimer, Slot

from retro_chip8.common.types import KeyMap
from retro_chip8.core.errors import Chip8Error, Chip8Fault
from retro_chip8.config.models import MachineConfig
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.loader.loader import BinaryLoader
from .display_view import DisplayView
from .register_view import RegisterView

logger = logging.getLogger(__name__)

# @intent:responsibility 押されたキーの文字から、キーマップに従ってキーパッドのインデックスを求めます。
def resolve_key(keymap: KeyMap, text: str) -> Optional[int]:
    if not text:
        return None
    return keymap.get(text.lower())

# @intent:responsibility アプリケーションのメインウィンドウを定義し、UIの主要なコンポーネントを組み立てます。
class MainWindow(QMainWindow):
    """
    アプリケーションのメインウィンドウクラス。
    QTimerで tick_hz 周期のフレームを駆動し、1フレームごとに steps_per_tick 命令と1tickを実行します。
    """
    def __init__(self, config: Optional[MachineConfig] = None, parent=None):
        super().__init__(parent)
        self._config = config or MachineConfig()
        self.setWindowTitle("CHIP-8")

        self.machine = SystemBuilder().build_system(self._config)

        self.display_view = DisplayView(self._config.display)
        self.display_view.set_machine(self.machine)
        self.setCentralWidget(self.display_view)

        self._create_status_inspector()
        self._create_toolbar()
        self._create_menus()

        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(max(1, round(1000 / self._config.timing.tick_hz)))
        self._frame_timer.timeout.connect(self._run_frame)

        self._update_ui_state(False)

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.load_rom_action = QAction("Load ROM...", self)
        self.load_rom_action.setShortcut("Ctrl+O")
        self.load_rom_action.triggered.connect(self._load_rom_file)
        file_menu.addAction(self.load_rom_action)

    # @intent:responsibility 実行制御用のツールバーを作成します。
    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self.start)
        toolbar.addAction(self.run_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self.stop)
        toolbar.addAction(self.stop_action)

        self.step_action = QAction("Step", self)
        self.step_action.triggered.connect(self._step_once)
        toolbar.addAction(self.step_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self._reset_machine)
        toolbar.addAction(self.reset_action)

    def _create_status_inspector(self):
        status_dock = QDockWidget("Registers", self)
        status_dock.setAllowedAreas(Qt.RightDockWidgetArea)
        self.register_view = RegisterView()
        self.register_view.set_cpu(self.machine.cpu)
        status_dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, status_dock)

    # @intent:responsibility 実行状態に応じてUIコンポーネントの有効/無効を切り替えます。
    def _update_ui_state(self, is_running: bool):
        self.load_rom_action.setEnabled(not is_running)
        self.run_action.setEnabled(not is_running)
        self.step_action.setEnabled(not is_running)
        self.stop_action.setEnabled(is_running)

    def has_program(self) -> bool:
        return bool(self._config.program)

    def is_running(self) -> bool:
        return self._frame_timer.isActive()

    @Slot()
    def start(self):
        self._frame_timer.start()
        self._update_ui_state(True)

    @Slot()
    def stop(self):
        self._frame_timer.stop()
        self._update_ui_state(False)

    # @intent:responsibility 1フレーム分（N命令 + 1tick）を実行し、画面とレジスタ表示を更新します。
    # @intent:rationale 不正状態はハードストップ。タイマを止め、診断情報をユーザーに提示します。
    @Slot()
    def _run_frame(self):
        try:
            self.machine.run_frame(self._config.timing.steps_per_tick)
        except Chip8Fault as fault:
            self._halt(fault)
            return

        if self.machine.on_beep_edge():
            QApplication.beep()
        self._refresh_views()

    @Slot()
    def _step_once(self):
        try:
            snapshot = self.machine.step()
        except Chip8Fault as fault:
            self._halt(fault)
            return
        self.statusBar().showMessage(snapshot.metadata.trace or "")
        self._refresh_views()

    @Slot()
    def _reset_machine(self):
        self.stop()
        if self._config.program:
            self.load_rom(self._config.program)
        else:
            self.machine.reset()
            self._refresh_views()

    def _halt(self, fault: Chip8Fault):
        self.stop()
        logger.error("Emulation halted: %s", fault)
        QMessageBox.critical(self, "Emulation halted", str(fault))
        self._refresh_views()

    def _refresh_views(self):
        self.display_view.refresh()
        self.register_view.update_registers()

    @Slot()
    def _load_rom_file(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open CHIP-8 ROM", "", "CHIP-8 ROMs (*.ch8 *.c8);;All Files (*)")
        if file_name:
            self.load_rom(file_name)

    # @intent:responsibility ROMファイルをロードし、成功したかを返します。
    def load_rom(self, file_name: str) -> bool:
        try:
            BinaryLoader().load_binary(file_name, self.machine)
        except (Chip8Error, OSError) as e:
            QMessageBox.critical(self, "Error", f"Failed to load ROM: {e}")
            return False
        self._config.program = file_name
        self._refresh_views()
        return True

    # @intent:responsibility ホストのキー押下をキーパッドに反映します。Escapeでウィンドウを閉じます。
    def keyPressEvent(self, event: QKeyEvent):
        if event.key() == Qt.Key_Escape:
            self.close()
            return
        index = resolve_key(self._config.keymap, event.text())
        if index is None:
            super().keyPressEvent(event)
            return
        self.machine.set_key(index, True)

    def keyReleaseEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            return
        index = resolve_key(self._config.keymap, event.text())
        if index is None:
            super().keyReleaseEvent(event)
            return
        self.machine.set_key(index, False)

    def closeEvent(self, event: QCloseEvent):
        self._frame_timer.stop()
        event.accept()
