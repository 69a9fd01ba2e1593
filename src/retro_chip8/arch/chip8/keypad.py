# src/retro_chip8/arch/chip8/keypad.py
"""
16キーの入力デバイス。
"""
from typing import Optional

KEY_COUNT = 16

# @intent:responsibility 16個のキーの押下状態を保持します。命令からは読み取り専用です。
class Keypad:
    def __init__(self):
        self._keys = [False] * KEY_COUNT

    # @intent:responsibility 外部の入力バックエンドからキー状態を書き込みます。
    # @intent:pre-condition 0 <= index < 16
    def set_key(self, index: int, pressed: bool) -> None:
        if not 0 <= index < KEY_COUNT:
            raise ValueError(f"Key index {index} is not in range 0x0-0xF.")
        self._keys[index] = bool(pressed)

    def is_pressed(self, index: int) -> bool:
        return self._keys[index & 0xF]

    # @intent:responsibility キー待ち(FX0A)のために押下中のキーを1つ返します。
    # @intent:rationale 複数のキーが押されている場合は最も大きいインデックスを採用します。
    def pressed_key(self) -> Optional[int]:
        for index in reversed(range(KEY_COUNT)):
            if self._keys[index]:
                return index
        return None

    def release_all(self) -> None:
        self._keys = [False] * KEY_COUNT
