"""A single fixed-width signed register."""


class Register:
    """Holds one signed integer of ``bits`` width, wrapping on write."""

    __slots__ = ("bits", "_value")

    def __init__(self, bits: int = 16, value: int = 0) -> None:
        if bits <= 0:
            raise ValueError("register width must be positive")
        self.bits = bits
        self._value = 0
        self.write(value)

    @property
    def value(self) -> int:
        return self._value

    def write(self, value: int) -> None:
        """Store ``value`` wrapped to the register's signed range."""
        mask = (1 << self.bits) - 1
        raw = int(value) & mask
        self._value = raw - (1 << self.bits) if raw >> (self.bits - 1) else raw

    def to_bits(self) -> str:
        """Return the two's complement bit pattern, most significant bit first."""
        mask = (1 << self.bits) - 1
        return format(self._value & mask, f"0{self.bits}b")

    def __repr__(self) -> str:
        return f"Register(bits={self.bits}, value={self._value})"