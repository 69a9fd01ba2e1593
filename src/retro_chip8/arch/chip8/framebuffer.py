# src/retro_chip8/arch/chip8/framebuffer.py
"""
64x32 モノクロフレームバッファ。

XOR描画と衝突検出を行い、外部のレンダラに対して再描画が必要かどうかをフラグで伝えます。
"""
from typing import Iterable, Tuple

WIDTH = 64
HEIGHT = 32
SPRITE_WIDTH = 8

# @intent:responsibility 1ピクセル1ビットの画面状態と再描画フラグを保持します。
class Framebuffer:
    """
    行優先(row-major)で64x32セルを保持するフレームバッファ。
    各セルは0または1です。
    """
    def __init__(self):
        self._cells = bytearray(WIDTH * HEIGHT)
        # @intent:rationale 起動直後の最初のフレームで必ず画面を描かせるため、Trueで開始します。
        self._redraw_owed = True

    # @intent:responsibility 全ピクセルを消去し、再描画を要求します。
    def clear(self) -> None:
        self._cells[:] = bytes(WIDTH * HEIGHT)
        self._redraw_owed = True

    # @intent:responsibility スプライトをXOR描画し、衝突の有無を返します。
    # @intent:post-condition 衝突の有無にかかわらず再描画フラグが立ちます。
    def draw_sprite(self, x: int, y: int, rows: Iterable[int]) -> bool:
        """
        各行は1バイトで、最上位ビットが左端の列です。
        座標は画面端で折り返します（クリップしません）。
        既に1のセルに描いた場合、衝突としてTrueを返します。
        """
        collision = False
        for r, sprite in enumerate(rows):
            row = ((y + r) % HEIGHT) * WIDTH
            for c in range(SPRITE_WIDTH):
                if sprite & (0x80 >> c) == 0:
                    continue
                index = row + (x + c) % WIDTH
                if self._cells[index]:
                    collision = True
                self._cells[index] ^= 1
        self._redraw_owed = True
        return collision

    # @intent:pre-condition 0 <= x < 64, 0 <= y < 32
    def pixel_at(self, x: int, y: int) -> bool:
        if not (0 <= x < WIDTH and 0 <= y < HEIGHT):
            raise IndexError(f"Pixel ({x}, {y}) out of bounds for {WIDTH}x{HEIGHT} framebuffer.")
        return self._cells[y * WIDTH + x] == 1

    # @intent:responsibility 再描画フラグを返し、同時にクリアします（1回の問い合わせで1回だけリセット）。
    def is_redraw_owed(self) -> bool:
        owed = self._redraw_owed
        self._redraw_owed = False
        return owed

    # @intent:responsibility レンダラ向けに読み取り専用のコピーを返します。
    def snapshot(self) -> Tuple[Tuple[bool, ...], ...]:
        return tuple(
            tuple(self._cells[y * WIDTH + x] == 1 for x in range(WIDTH))
            for y in range(HEIGHT)
        )
