"""Word-addressed main memory."""

from collections.abc import Iterable

from wordvm.vmtypes import to_address, to_word


class Memory:
    """A fixed number of signed 16-bit words, all zero initially."""

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError("memory size must not be negative")
        self._data = [0] * size

    def __len__(self) -> int:
        return len(self._data)

    def read(self, address: int) -> int:
        """Return the word at ``address``."""
        address = to_address(address)
        if address >= len(self._data):
            raise IndexError("Memory read out of bounds")
        return self._data[address]

    def write(self, address: int, value: int) -> None:
        """Store ``value`` at ``address``."""
        address = to_address(address)
        if address >= len(self._data):
            raise IndexError("Memory write out of bounds")
        self._data[address] = to_word(value)

    def clear(self) -> None:
        """Set every word to zero."""
        self._data = [0] * len(self._data)

    def load(self, values: Iterable[int], start_address: int) -> None:
        """Copy ``values`` into memory starting at ``start_address``."""
        words = [to_word(v) for v in values]
        start = to_address(start_address)
        if start + len(words) > len(self._data):
            raise IndexError("Data does not fit in memory at the specified address")
        self._data[start:start + len(words)] = words