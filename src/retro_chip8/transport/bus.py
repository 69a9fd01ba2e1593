# retro_chip8/transport/bus.py
"""
Transport Layer (アドレスデコーダ)

アドレスを受け取り、担当するデバイスとデバイス内オフセットに振り分けます。
CPUから見えるのはこのバスだけで、メモリの分割方法（ROM/RAMの境界）はバスが隠蔽します。

命令が発行したアクセスは1ステップ分だけ記録され、Snapshotの bus_activity に渡されます。
ローダーのための load と、ROMが無視した書き込みは記録の対象外です。
"""
from abc import ABC, abstractmethod
from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Tuple
import logging

from retro_chip8.core.errors import AddressOutOfRange

logger = logging.getLogger(__name__)


class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"


# @intent:data_structure 命令が行った1回のメモリアクセス。
@dataclass(frozen=True)
class BusAccess:
    address: int
    data: int
    access_type: BusAccessType


# @intent:responsibility バスに接続できる8bitデバイスのインターフェース。
class Device(ABC):
    """
    オフセット（0始まり）でアドレスされる8bitデバイス。
    """
    @abstractmethod
    def read(self, offset: int) -> int:
        pass

    @abstractmethod
    def write(self, offset: int, data: int) -> None:
        pass


# @intent:responsibility 固定長のバイト配列として振る舞う読み書き可能なメモリ。
class RAM(Device):
    def __init__(self, size: int):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("RAM size must be a positive integer.")
        self._cells = bytearray(size)

    def get_size(self) -> int:
        return len(self._cells)

    def _check_offset(self, offset: int) -> None:
        if not 0 <= offset < len(self._cells):
            raise IndexError(
                f"Address {offset} out of bounds for {type(self).__name__} of size {len(self._cells)}."
            )

    def read(self, offset: int) -> int:
        self._check_offset(offset)
        return self._cells[offset]

    def write(self, offset: int, data: int) -> None:
        self._check_offset(offset)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._cells[offset] = data

    def clear(self) -> None:
        self._cells[:] = bytes(len(self._cells))


# @intent:responsibility 起動時に内容を焼き込み、以後は読み出し専用になるメモリ。
# @intent:rationale 実機のROMと同様、書き込みは失敗させずに無視します。
class ROM(RAM):
    def write(self, offset: int, data: int) -> None:
        self._check_offset(offset)
        logger.warning("Ignored write of %#04x to ROM offset %#06x", data, offset)

    # @intent:responsibility 内容を初期化するための経路。バスの書き込みとは別です。
    def load_data(self, offset: int, data: int) -> None:
        super().write(offset, data)


class Region(NamedTuple):
    start: int
    end: int  # 終端を含む
    device: Device


# @intent:responsibility 登録されたアドレス範囲に従ってアクセスをデバイスへ振り分けます。
class Bus:
    """
    アドレス範囲とデバイスの対応表を持つバス。
    範囲は開始アドレス順に保持し、二分探索で担当デバイスを引きます。
    どの範囲にも属さないアドレスはAddressOutOfRangeになります。
    """
    def __init__(self):
        self._regions: List[Region] = []
        self._starts: List[int] = []
        self._activity: List[BusAccess] = []

    # @intent:pre-condition 0 <= start <= end。RAM/ROMは範囲の長さとサイズが一致していること。
    # @intent:rationale 範囲の重なりは検査しません。構成する側（AddressSpace）の責任です。
    def register_device(self, start: int, end: int, device: Device) -> None:
        if not 0 <= start <= end:
            raise ValueError(f"Invalid address range {start:#06x}-{end:#06x}: start must be non-negative and <= end.")
        if not isinstance(device, Device):
            raise TypeError("Device must be an instance of a class derived from Device.")
        span = end - start + 1
        if isinstance(device, RAM) and device.get_size() != span:
            raise ValueError(
                f"Registered {type(device).__name__} device size ({device.get_size()} bytes) "
                f"does not match the address range ({span} bytes)."
            )

        index = bisect_right(self._starts, start)
        self._starts.insert(index, start)
        self._regions.insert(index, Region(start, end, device))

    def _resolve(self, address: int) -> Tuple[Device, int]:
        index = bisect_right(self._starts, address) - 1
        if index >= 0:
            region = self._regions[index]
            if address <= region.end:
                return region.device, address - region.start
        raise AddressOutOfRange(address)

    def read(self, address: int) -> int:
        device, offset = self._resolve(address)
        data = device.read(offset)
        self._activity.append(BusAccess(address, data, BusAccessType.READ))
        return data

    # @intent:post-condition ROMは書き込みを無視するため、記録にも残しません。
    def write(self, address: int, data: int) -> None:
        device, offset = self._resolve(address)
        device.write(offset, data)
        if not isinstance(device, ROM):
            self._activity.append(BusAccess(address, data, BusAccessType.WRITE))

    # @intent:responsibility address から length バイトが全てマップされていることを、アクセス前に確かめます。
    # @intent:post-condition 範囲外があれば最初の範囲外アドレスでAddressOutOfRangeを送出します。
    def check_mapped(self, address: int, length: int) -> None:
        for current in range(address, address + length):
            self._resolve(current)

    # @intent:responsibility 記録を残さずに書き込みます。ROMにも書き込めるローダー専用の経路です。
    def load(self, address: int, data: int) -> None:
        device, offset = self._resolve(address)
        if isinstance(device, ROM):
            device.load_data(offset, data)
        else:
            device.write(offset, data)

    # @intent:responsibility 記録済みのアクセスを取り出し、記録を空にします。
    def get_and_clear_activity_log(self) -> List[BusAccess]:
        activity, self._activity = self._activity, []
        return activity
