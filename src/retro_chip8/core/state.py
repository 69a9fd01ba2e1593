# retro_chip8/core/state.py
"""
Core Layer (CPU状態)

命令サイクルの駆動に必要な最小限の状態（プログラムカウンタとスタックポインタ）を定義します。
"""
from dataclasses import dataclass

# @intent:responsibility AbstractCpuが直接参照するレジスタだけを保持します。汎用レジスタ等は派生クラスで追加します。
@dataclass
class CpuState:
    pc: int = 0x0000
    sp: int = 0
