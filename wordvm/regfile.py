"""A bank of general-purpose registers."""

from enum import IntEnum

from wordvm.register import Register


class Reg(IntEnum):
    """Register file slots with a fixed meaning."""

    ACC = 0
    PC = 1
    SP = 2
    R0 = 3
    R1 = 4


class RegisterFile:
    """An indexed set of 16-bit registers."""

    def __init__(self, size: int = 16) -> None:
        self._registers = [Register(16) for _ in range(size)]

    def __len__(self) -> int:
        return len(self._registers)

    def _check(self, index: int, what: str) -> int:
        index = int(index)
        if not 0 <= index < len(self._registers):
            raise IndexError(f"RegFile {what} out of bounds")
        return index

    def read(self, index: int) -> int:
        return self._registers[self._check(index, "read")].value

    def write(self, index: int, value: int) -> None:
        self._registers[self._check(index, "write")].write(value)

    def get_register(self, index: int) -> Register:
        """Return the register object itself, sharing its state."""
        return self._registers[self._check(index, "get reg")]

    def clear(self) -> None:
        """Set every register to zero."""
        for register in self._registers:
            register.write(0)