"""The processor: fetch, decode and execute cycle."""

import sys
import time
from typing import Callable, Dict, Optional, TextIO

from wordvm.bitmap import BitMap
from wordvm.decode import AddrMode, decode_mode_opd1, decode_mode_opd2, get_base_opcode
from wordvm.memory import Memory
from wordvm.regfile import Reg, RegisterFile
from wordvm.register import Register

REGISTER_COUNT = 16


class UnknownOpcodeError(ValueError):
    """Raised when an instruction has an opcode the CPU does not know."""

    def __init__(self, opcode: int) -> None:
        super().__init__(f"Unknown opcode: {opcode}")
        self.opcode = opcode


class CPU:
    """An accumulator machine operating on a shared :class:`Memory`."""

    def __init__(self, memory: Memory, debug: bool = False, stream: Optional[TextIO] = None) -> None:
        self.memory = memory
        self.debug = debug
        self.stream = stream
        self.registers = RegisterFile(REGISTER_COUNT)
        self.running = False

        self._acc = self.registers.get_register(Reg.ACC)
        self._pc = self.registers.get_register(Reg.PC)
        self._sp = self.registers.get_register(Reg.SP)
        self._r0 = self.registers.get_register(Reg.R0)
        self._r1 = self.registers.get_register(Reg.R1)

        self._ri = Register(16)
        self._re = Register(16)
        self._mop = Register(8)

        self._nullary: Dict[int, Callable[[], None]] = {
            16: self._ret,
            11: self._stop,
        }
        self._unary: Dict[int, Callable[[int], None]] = {
            2: self._add,
            0: self._br,
            5: self._brneg,
            1: self._brpos,
            4: self._brzero,
            15: self._call,
            10: self._divide,
            3: self._load,
            14: self._mult,
            17: self._push,
            7: self._store,
            6: self._sub,
            18: self._pop,
        }
        self._binary: Dict[int, Callable[[int, int], None]] = {
            13: self._copy_r,
            19: self._copy_m,
        }

    @property
    def _out(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stdout

    def _trace(self, text: str) -> None:
        if self.debug:
            self._out.write(text)

    def reset(self) -> None:
        """Zero every register and the whole memory, and stop."""
        for register in (self._acc, self._pc, self._sp, self._r0, self._r1):
            register.write(0)
        self.registers.clear()
        self.memory.clear()
        self.running = False

    def state(self) -> Dict[str, int]:
        """Current values of the visible registers."""
        return {
            "acc": self._acc.value,
            "pc": self._pc.value,
            "sp": self._sp.value,
            "mop": self._mop.value,
            "ri": self._ri.value,
            "re": self._re.value,
            "r0": self._r0.value,
            "r1": self._r1.value,
        }

    def print_state(self) -> None:
        """Write the register contents in binary."""
        out = self._out
        out.write("CPU STATE\n")
        out.write(f"\tacc = 0b{self._acc.to_bits()} ({self._acc.value})\n")
        out.write(f"\tpc = 0b{self._pc.to_bits()}\n")
        out.write(f"\tsp = 0b{self._sp.to_bits()}\n")
        out.write(f"\tmop = 0b{self._mop.to_bits()}\n")
        out.write(f"\tri = 0b{self._ri.to_bits()}\n")
        out.write(f"\tre = 0b{self._re.to_bits()}\n")
        out.write(f"\tr0 = 0b{self._r0.to_bits()}\n")
        out.write(f"\tr1 = 0b{self._r1.to_bits()}\n")

    def run(self, bitmap: Optional[BitMap] = None, max_cycles: Optional[int] = None, delay: float = 0.0) -> int:
        """Cycle until STOP or ``max_cycles``; return the number of cycles run."""
        self.running = True
        count = 0
        while self.running and (max_cycles is None or count < max_cycles):
            self.cycle()
            count += 1
            if bitmap is not None:
                bitmap.show(self._out)
            if delay:
                time.sleep(delay)
        return count

    def _fetch_word(self) -> int:
        self._re.write(self._pc.value)
        word = self.memory.read(self._re.value)
        self._pc.write(self._pc.value + 1)
        return word

    def _fetch_operand(self, mode: AddrMode) -> int:
        operand = self._fetch_word()
        if mode is AddrMode.DIRECT:
            return self.memory.read(operand)
        if mode is AddrMode.INDIRECT:
            return self.memory.read(self.memory.read(operand))
        return operand

    def _trace_mode(self, label: str, mode: AddrMode) -> None:
        self._trace(f"{label} MODE: {mode.value}({mode.name})\n")

    def cycle(self) -> None:
        """Fetch, decode and execute one instruction."""
        self._re.write(self._pc.value)
        self._ri.write(self.memory.read(self._re.value))
        self._pc.write(self._pc.value + 1)

        opcode = get_base_opcode(self._ri.value)
        self._trace(f"OPCODE: {opcode}\t| ")

        nullary = self._nullary.get(opcode)
        if nullary is not None:
            nullary()
            return

        mode1 = decode_mode_opd1(self._ri.value)
        self._trace_mode("OPD1", mode1)
        opd1 = self._fetch_operand(mode1)

        unary = self._unary.get(opcode)
        if unary is not None:
            unary(opd1)
            return

        mode2 = decode_mode_opd2(self._ri.value)
        self._trace_mode("OPD2", mode2)
        opd2 = self._fetch_operand(mode2)

        binary = self._binary.get(opcode)
        if binary is None:
            raise UnknownOpcodeError(opcode)
        binary(opd1, opd2)

    # instructions without operands

    def _ret(self) -> None:
        self._trace("RET\n")
        self._pc.write(self.memory.read(self._sp.value))
        self._sp.write(self._sp.value - 1)

    def _stop(self) -> None:
        self._trace("STOP\n")
        self.running = False

    # instructions with one operand

    def _add(self, opd1: int) -> None:
        self._trace(f"ADD({opd1})\n")
        self._acc.write(self._acc.value + opd1)

    def _br(self, opd1: int) -> None:
        self._trace(f"BR({opd1})\n")
        self._pc.write(opd1)

    def _brneg(self, opd1: int) -> None:
        self._trace(f"BRNEG({opd1})\n")
        if self._acc.value < 0:
            self._pc.write(opd1)

    def _brpos(self, opd1: int) -> None:
        self._trace(f"BRPOS({opd1})\n")
        if self._acc.value > 0:
            self._pc.write(opd1)

    def _brzero(self, opd1: int) -> None:
        self._trace(f"BRZERO({opd1})\n")
        if self._acc.value == 0:
            self._pc.write(opd1)

    def _call(self, opd1: int) -> None:
        self._trace(f"CALL({opd1})\n")
        self._sp.write(self._pc.value)
        self._pc.write(opd1)

    def _divide(self, opd1: int) -> None:
        self._trace(f"DIVIDE({opd1})\n")
        if opd1 == 0:
            raise ZeroDivisionError("division by zero")
        dividend = self._acc.value
        quotient = abs(dividend) // abs(opd1)
        if (dividend < 0) != (opd1 < 0):
            quotient = -quotient
        self._acc.write(quotient)

    def _load(self, opd1: int) -> None:
        self._trace(f"LOAD({opd1})\n")
        self._acc.write(opd1)

    def _mult(self, opd1: int) -> None:
        self._trace(f"MULT({opd1})\n")
        self._acc.write(self._acc.value * opd1)

    def _push(self, opd1: int) -> None:
        self._trace(f"PUSH({opd1})\n")
        self.memory.write(self._sp.value, opd1)
        self._sp.write(self._sp.value + 1)

    def _pop(self, opd1: int) -> None:
        self._trace(f"POP({opd1})\n")
        self.registers.write(opd1, self.memory.read(self._sp.value))
        self._sp.write(self._sp.value - 1)

    def _store(self, opd1: int) -> None:
        self._trace(f"STORE({opd1})\n")
        self.memory.write(opd1, self._acc.value)

    def _sub(self, opd1: int) -> None:
        self._trace(f"SUB({opd1})\n")
        self._acc.write(self._acc.value - opd1)

    # instructions with two operands

    def _copy_r(self, opd1: int, opd2: int) -> None:
        self._trace(f"COPY REG[{opd1}] = {opd2}\n")
        self.registers.write(opd1, opd2)

    def _copy_m(self, opd1: int, opd2: int) -> None:
        self._trace(f"COPY MEM[{opd1}] = {opd2}\n")
        self.memory.write(opd1, opd2)