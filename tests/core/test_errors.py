# tests/core/test_errors.py
"""
retro_chip8.core.errorsモジュールの単体テスト。
"""
from retro_chip8.core.errors import (
    Chip8Error, Chip8Fault, ProgramTooLarge, AddressOutOfRange, StackOverflow, StackUnderflow,
)

# @intent:test_suite 例外の階層と診断メッセージを検証します。

def test_hierarchy():
    assert issubclass(ProgramTooLarge, Chip8Error)
    assert issubclass(ProgramTooLarge, ValueError)
    assert issubclass(AddressOutOfRange, Chip8Fault)
    assert issubclass(AddressOutOfRange, IndexError)
    assert issubclass(StackOverflow, Chip8Fault)
    assert issubclass(StackUnderflow, Chip8Fault)
    assert not issubclass(ProgramTooLarge, Chip8Fault)


def test_program_too_large_message():
    error = ProgramTooLarge(3585, 3584)
    assert error.size == 3585
    assert error.capacity == 3584
    assert "3585" in str(error)


def test_fault_without_context():
    assert str(StackUnderflow("Return with an empty call stack.")) == "Return with an empty call stack."


# @intent:test_case_context 文脈は最初に付与されたものが保持されることを検証します。
def test_attach_context_keeps_first_value():
    fault = AddressOutOfRange(0x1000)
    fault.attach_context(0x0FFE, 0xF065)
    fault.attach_context(0x0200, 0x0000)

    assert fault.pc == 0x0FFE
    assert fault.opcode == 0xF065
    assert str(fault) == "Address 0x1000 not mapped to any device. (PC=0x0ffe, opcode=F065)"
