# wordvm

A small accumulator virtual machine that works on signed 16-bit words. It has
an accumulator, a program counter and a stack pointer that live in a
sixteen-entry register file. Its instructions take direct, indirect or
immediate operands. A rectangle of memory can be printed as a text "bitmap".

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Running the demo

```
wordvm
```

This creates a 1024-word memory, loads the word list returned by
`wordvm.cli.fibonacci_program()` at address 0, and runs it. Each instruction
is traced to standard output. When the program stops or the cycle limit is
reached, the final CPU state is printed in binary.

Options:

- `--max-cycles N`: the cycle limit. The default is 300.
- `--delay SECONDS`: the pause after each cycle. The default is 0.1.
- `--quiet`: turns off the per-instruction trace.

The same command can also be run with `python -m wordvm.cli`.

## Using it as a library

```python
from wordvm.memory import Memory
from wordvm.cpu import CPU
from wordvm.cli import fibonacci_program

memory = Memory(1024)
cpu = CPU(memory)            # debug=False, output to sys.stdout
cpu.reset()
memory.load(fibonacci_program(), 0)
cycles = cpu.run(max_cycles=300)
print(cycles, cpu.state())
cpu.print_state()
```

### Modules

- `wordvm.vmtypes`: `to_word` and `to_byte` wrap an integer to signed 16-bit
  and signed 8-bit values. `to_address` wraps it to unsigned 16-bit.
- `wordvm.register.Register(bits=16, value=0)`: a signed register that wraps
  on `write`. Its `value` property reads it, and `to_bits()` returns the
  two's-complement bit string with the most significant bit first.
- `wordvm.memory.Memory(size)`: zero-filled word memory, with `len()`,
  `read`, `write`, `clear` and `load(values, start_address)`. Addresses are
  wrapped to unsigned 16-bit and values to signed 16-bit. An out-of-range
  access, or a load that does not fit, raises `IndexError`.
- `wordvm.regfile.RegisterFile(size=16)` and `wordvm.regfile.Reg`: an indexed
  bank of 16-bit registers with `read`, `write`, `get_register` (which returns
  the shared `Register`) and `clear`. A bad index raises `IndexError`. The
  named slots are `ACC` (0), `PC` (1), `SP` (2), `R0` (3) and `R1` (4).
- `wordvm.decode`: `get_base_opcode` returns the signed high byte.
  `decode_mode_opd1` and `decode_mode_opd2` return an `AddrMode` (`DIRECT`,
  `INDIRECT`, `IMMEDIATE`). `MemAllocation` is a frozen start/end pair.
- `wordvm.bitmap.BitMap(memory, start_index, width, height)`: `render()`
  returns the display as text, and `show(stream=None)` writes it to a stream.
  Row `r` starts at `start_index + r * height`. The constructor raises
  `IndexError` if `start_index + width * height` exceeds the memory size.
- `wordvm.cpu.CPU(memory, debug=False, stream=None)`:
  - `reset()` zeroes the registers and memory.
  - `cycle()` runs one instruction.
  - `run(bitmap=None, max_cycles=None, delay=0.0)` cycles until STOP or the
    limit, showing the bitmap after each cycle if one is given, and returns
    the number of cycles run.
  - `state()` returns a dict of `acc`, `pc`, `sp`, `mop`, `ri`, `re`, `r0`
    and `r1`.
  - `print_state()` writes them in binary.
  - With `debug=True`, each cycle is traced to `stream`, or to standard
    output when `stream` is `None`.
  - An opcode the CPU does not know raises `UnknownOpcodeError`, which has an
    `opcode` attribute.

### Instruction word

The high byte of an instruction holds the opcode. Bits 0–1 give the
addressing mode of the first operand, and bits 4–5 give the mode of the
second:

- `00` is direct: the operand word is an address whose contents are used.
- `01` is indirect: the address of an address.
- `10` or `11` is immediate: the operand word itself.

Operand words follow the instruction word in memory.

| Opcode | Instruction | Operands | Effect |
|-------:|-------------|---------:|--------|
| 0  | BR     | 1 | pc = a |
| 1  | BRPOS  | 1 | pc = a if acc > 0 |
| 2  | ADD    | 1 | acc += a |
| 3  | LOAD   | 1 | acc = a |
| 4  | BRZERO | 1 | pc = a if acc == 0 |
| 5  | BRNEG  | 1 | pc = a if acc < 0 |
| 6  | SUB    | 1 | acc -= a |
| 7  | STORE  | 1 | mem[a] = acc |
| 10 | DIVIDE | 1 | acc = acc / a, truncated toward zero (`ZeroDivisionError` if a is 0) |
| 11 | STOP   | 0 | stop running |
| 13 | COPY to register | 2 | reg[a] = b |
| 14 | MULT   | 1 | acc *= a |
| 15 | CALL   | 1 | sp = pc, then pc = a |
| 16 | RET    | 0 | pc = mem[sp], then sp -= 1 |
| 17 | PUSH   | 1 | mem[sp] = a, then sp += 1 |
| 18 | POP    | 1 | reg[a] = mem[sp], then sp -= 1 |
| 19 | COPY to memory | 2 | mem[a] = b |

All register results wrap to signed 16 bits.

## What it does not do

There is no assembler and no program loader from files. Programs are plain
lists of integers, which you place in memory with `Memory.load`. The only
command runs the built-in demo program.