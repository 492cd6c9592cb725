"""Fixed-width integer types of the virtual machine."""

WORD_BITS = 16
BYTE_BITS = 8
ADDRESS_BITS = 16


def _wrap_signed(value: int, bits: int) -> int:
    mask = (1 << bits) - 1
    raw = int(value) & mask
    return raw - (1 << bits) if raw >> (bits - 1) else raw


def to_word(value: int) -> int:
    """Wrap ``value`` to a signed 16-bit machine word."""
    return _wrap_signed(value, WORD_BITS)


def to_byte(value: int) -> int:
    """Wrap ``value`` to a signed 8-bit byte."""
    return _wrap_signed(value, BYTE_BITS)


def to_address(value: int) -> int:
    """Wrap ``value`` to an unsigned 16-bit address."""
    return int(value) & ((1 << ADDRESS_BITS) - 1)