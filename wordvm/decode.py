"""Instruction decoding helpers."""

from dataclasses import dataclass
from enum import Enum

from wordvm.vmtypes import to_byte, to_word


@dataclass(frozen=True)
class MemAllocation:
    """A span of memory indices."""

    start_index: int
    end_index: int


class AddrMode(Enum):
    """How an operand word is turned into a value."""

    DIRECT = 0
    INDIRECT = 1
    IMMEDIATE = 2


_MODES = {0b00: AddrMode.DIRECT, 0b01: AddrMode.INDIRECT}


def decode_mode_opd1(instr: int) -> AddrMode:
    """Addressing mode of the first operand (bits 0-1)."""
    return _MODES.get(instr & 0b11, AddrMode.IMMEDIATE)


def decode_mode_opd2(instr: int) -> AddrMode:
    """Addressing mode of the second operand (bits 4-5)."""
    return _MODES.get((instr & 0b110000) >> 4, AddrMode.IMMEDIATE)


def get_base_opcode(instr: int) -> int:
    """The signed high byte of an instruction word."""
    return to_byte(to_word(instr) >> 8)