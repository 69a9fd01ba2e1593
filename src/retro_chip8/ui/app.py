# src/retro_chip8/ui/app.py
"""
Qtアプリケーションのエントリポイント。
設定とROMを読み込み、メインウィンドウを起動します。
"""
import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import MachineConfig
from retro_chip8.core.errors import Chip8Error
from .main_window import MainWindow

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 virtual machine")
    parser.add_argument("rom", nargs="?", help="CHIP-8 program (raw binary)")
    parser.add_argument("--config", help="YAML machine configuration")
    parser.add_argument("--verbose", action="store_true", help="Enable per-instruction debug logging")
    return parser.parse_args(argv)

# @intent:responsibility 引数から設定を組み立てます。コマンドラインのROMは設定ファイルのprogramより優先します。
def build_config(args: argparse.Namespace) -> MachineConfig:
    config = ConfigLoader().load_from_file(args.config) if args.config else MachineConfig()
    if args.rom:
        config.program = args.rom
    return config

# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    app = QApplication(sys.argv[:1])
    try:
        main_win = MainWindow(build_config(args))
    except (Chip8Error, OSError, ValueError) as e:
        logging.getLogger(__name__).error("Failed to start: %s", e)
        return 1

    main_win.show()
    if main_win.has_program():
        main_win.start()
    return app.exec()

if __name__ == '__main__':
    sys.exit(main())
