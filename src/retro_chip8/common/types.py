"""
レイヤーをまたいで使う型。
"""
from typing import Dict, List, NamedTuple

# ホストのキー文字（小文字） -> キーパッドのインデックス(0x0-0xF)
KeyMap = Dict[str, int]

# @intent:data_structure UIがCPUの実装を知らずにレジスタ欄を作るための記述子。
class RegisterInfo(NamedTuple):
    name: str
    width: int  # bits

class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
