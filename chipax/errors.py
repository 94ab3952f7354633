"""Exceptions raised by the CHIP-8 engine and its driver."""

from typing import Optional

from chipax.constants import (
    MAX_PROGRAM_SIZE, STATUS_OK, STATUS_STACK_OVERFLOW, STATUS_STACK_UNDERFLOW,
    STATUS_OUT_OF_BOUNDS_FETCH,
)


class EmulatorError(Exception):
    """Base exception for all emulator errors."""

    def __init__(self, message: str, pc: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.pc = pc

    def __str__(self) -> str:
        if self.pc is None:
            return self.message
        return f"{self.message} (PC=0x{self.pc:03X})"


class ProgramTooLarge(EmulatorError):
    """Program does not fit between 0x200 and the end of memory."""

    def __init__(self, size: int):
        super().__init__(
            f"Program is {size} bytes, at most {MAX_PROGRAM_SIZE} bytes fit in memory"
        )
        self.size = size


class ExecutionError(EmulatorError):
    """Fatal fault that halted the running program."""
    status: int = STATUS_OK


class StackOverflow(ExecutionError):
    """Subroutine call with a full stack."""
    status = STATUS_STACK_OVERFLOW


class StackUnderflow(ExecutionError):
    """Return with an empty stack."""
    status = STATUS_STACK_UNDERFLOW


class OutOfBoundsFetch(ExecutionError):
    """Program counter ran past the last readable instruction."""
    status = STATUS_OUT_OF_BOUNDS_FETCH


_STATUS_ERRORS = {
    StackOverflow.status: (StackOverflow, "Stack overflow on subroutine call"),
    StackUnderflow.status: (StackUnderflow, "Stack underflow on return"),
    OutOfBoundsFetch.status: (OutOfBoundsFetch, "Instruction fetch outside memory"),
}


def error_for_status(status: int, pc: Optional[int] = None) -> Optional[ExecutionError]:
    """Build the exception matching a status code, or None for STATUS_OK."""
    if status == STATUS_OK:
        return None
    if status not in _STATUS_ERRORS:
        raise ValueError(f"Unknown status code: {status}")
    error_cls, message = _STATUS_ERRORS[status]
    return error_cls(message, pc=pc)


def raise_for_status(state) -> None:
    """Raise the ExecutionError recorded in ``state.status``, if any."""
    error = error_for_status(int(state.status), pc=int(state.pc))
    if error is not None:
        raise error
