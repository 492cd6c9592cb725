"""Command line entry point running the Fibonacci demo program."""

import argparse
from typing import List, Optional

from wordvm.cpu import CPU
from wordvm.memory import Memory
from wordvm.regfile import Reg

MEMORY_WORDS = 1024
END = 37
LOOP = 13


def fibonacci_program() -> List[int]:
    """The demo program that iterates Fibonacci numbers in registers."""
    return [
        0x0D22, 6, 0,                 # $FIB0 = 0
        0x0D22, 7, 1,                 # $FIB1 = 1
        0x0302, 4,                    # $ACC = N
        0x0602, 2,                    # $ACC -= 2
        0x0D02, 5, int(Reg.ACC),      # $I = $ACC
        0x0300, 7,                    # LOOP: $ACC = $FIB1
        0x0200, 6,                    # $ACC += $FIB0
        0x0D02, 8, int(Reg.ACC),      # $TEMP = $ACC
        0x0D02, 6, 7,                 # $FIB0 = $FIB1
        0x0D02, 7, 8,                 # $FIB1 = $TEMP
        0x0300, 5,                    # $ACC = $I
        0x0602, 1,                    # $ACC -= 1
        0x0402, END,                  # BRZERO(END)
        0x0D02, 5, int(Reg.ACC),      # $I = $ACC
        0x0002, LOOP,                 # BR(LOOP)
        0x0B00,                       # END: STOP
    ]


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the demo program on the word machine.")
    parser.add_argument("--max-cycles", type=int, default=300, help="cycle limit (default 300)")
    parser.add_argument("--delay", type=float, default=0.1, help="seconds to pause after each cycle")
    parser.add_argument("--quiet", action="store_true", help="do not trace each instruction")
    args = parser.parse_args(argv)

    memory = Memory(MEMORY_WORDS)
    cpu = CPU(memory, debug=not args.quiet)
    cpu.reset()
    memory.load(fibonacci_program(), 0)
    cpu.run(max_cycles=args.max_cycles, delay=args.delay)
    cpu.print_state()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())