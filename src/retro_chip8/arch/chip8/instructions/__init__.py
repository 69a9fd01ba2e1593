# src/retro_chip8/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from dataclasses import replace
import logging

from retro_chip8.core.snapshot import Operation, StepStatus
from retro_chip8.arch.chip8.memory import AddressSpace
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import Chip8Io
from .maps import DECODE_MAP, MNEMONIC_MAP, EXECUTE_MAP

logger = logging.getLogger(__name__)

UNKNOWN = "UNKNOWN"

# @intent:responsibility 16bitのオペコードをデコードし、Operationを返します。
def decode_opcode(opcode: int, address: int) -> Operation:
    """
    CHIP-8のオペコードをデコードし、Operationオブジェクトを返します。
    ファミリ内で該当するバリアントがない場合は UNKNOWN パターンを返します。
    """
    mask, variants = DECODE_MAP[(opcode >> 12) & 0xF]
    pattern = variants.get(opcode & mask)
    if pattern is None:
        return Operation(opcode=opcode, address=address, pattern=UNKNOWN,
                         mnemonic=UNKNOWN, operands=[f"${opcode:04X}"])

    mnemonic, operand_format = MNEMONIC_MAP[pattern]
    operation = Operation(opcode=opcode, address=address, pattern=pattern, mnemonic=mnemonic)
    if not operand_format:
        return operation
    operands = operand_format.format(
        x=operation.x, y=operation.y, n=operation.n, nn=operation.nn, nnn=operation.nnn
    ).split(", ")
    return replace(operation, operands=operands)

# @intent:responsibility デコードされた命令を実行し、ステップの結果区分を返します。
# @intent:rationale 未定義命令は致命的ではありません。警告をログに出し、NOPとして扱います（PCは+2済み）。
def execute_instruction(operation: Operation, state: Chip8CpuState, bus: AddressSpace, io: Chip8Io) -> StepStatus:
    executor = EXECUTE_MAP.get(operation.pattern)
    if executor is None:
        logger.warning("Unknown opcode %04X at %#06x", operation.opcode, operation.address)
        return StepStatus.UNKNOWN_OPCODE
    status = executor(state, bus, io, operation)
    return status or StepStatus.EXECUTED
