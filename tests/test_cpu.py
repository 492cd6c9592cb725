import io

import pytest

from wordvm.bitmap import BitMap
from wordvm.cpu import CPU, UnknownOpcodeError
from wordvm.memory import Memory
from wordvm.regfile import Reg
from wordvm.vmtypes import to_word

IMM1 = 0x02
IND1 = 0x01
IMM2 = 0x20
STOP = 11 << 8


def op(code, mode=0):
    return (code << 8) | mode


def machine(program, size=256, **kwargs):
    mem = Memory(size)
    cpu = CPU(mem, **kwargs)
    cpu.reset()
    mem.load(program, 0)
    return cpu, mem


def test_load_immediate_then_stop():
    cpu, _ = machine([op(3, IMM1), 5, STOP])
    cycles = cpu.run()
    assert cycles == 2
    assert cpu.running is False
    assert cpu.state()["acc"] == 5
    assert cpu.state()["pc"] == 3


def test_direct_and_indirect_operands():
    mem_program = [op(3), 100, op(2, IND1), 101, STOP]
    cpu, mem = machine(mem_program)
    mem.write(100, 40)
    mem.write(101, 102)
    mem.write(102, 2)
    cpu.run()
    assert cpu.state()["acc"] == 42


def test_add_wraps_to_word():
    cpu, _ = machine([op(3, IMM1), 32767, op(2, IMM1), 1, STOP])
    cpu.run()
    assert cpu.state()["acc"] == to_word(32768)


def test_sub_and_mult():
    cpu, _ = machine([op(3, IMM1), 10, op(6, IMM1), 4, op(14, IMM1), 7, STOP])
    cpu.run()
    assert cpu.state()["acc"] == (10 - 4) * 7


def test_divide_truncates_toward_zero():
    cpu, _ = machine([op(3, IMM1), -7, op(10, IMM1), 2, STOP])
    cpu.run()
    assert cpu.state()["acc"] == -3


def test_divide_by_zero():
    cpu, _ = machine([op(3, IMM1), 1, op(10, IMM1), 0, STOP])
    with pytest.raises(ZeroDivisionError):
        cpu.run()


def test_store_writes_accumulator():
    cpu, mem = machine([op(3, IMM1), 9, op(7, IMM1), 50, STOP])
    cpu.run()
    assert mem.read(50) == 9


@pytest.mark.parametrize(
    "code, acc, taken",
    [
        (4, 0, True),
        (4, 1, False),
        (5, -1, True),
        (5, 0, False),
        (1, 1, True),
        (1, -1, False),
    ],
)
def test_conditional_branches(code, acc, taken):
    cpu, _ = machine([op(3, IMM1), acc, op(code, IMM1), 60])
    cpu.cycle()
    cpu.cycle()
    assert (cpu.state()["pc"] == 60) is taken
    if not taken:
        assert cpu.state()["pc"] == 4


def test_unconditional_branch_loops_until_limit():
    cpu, _ = machine([op(0, IMM1), 0])
    cycles = cpu.run(max_cycles=5)
    assert cycles == 5
    assert cpu.running is True
    assert cpu.state()["pc"] == 0


def test_call_saves_return_address():
    cpu, _ = machine([op(15, IMM1), 20])
    cpu.cycle()
    assert cpu.state()["pc"] == 20
    assert cpu.state()["sp"] == 2


def test_ret_reads_stack_top():
    cpu, mem = machine([op(16)])
    mem.write(0, op(16))
    cpu.registers.write(Reg.SP, 30)
    mem.write(30, 77)
    cpu.cycle()
    assert cpu.state()["pc"] == 77
    assert cpu.state()["sp"] == 29


def test_push_and_pop():
    program = [
        op(13, IMM1 | IMM2), int(Reg.SP), 50,
        op(17, IMM1), 7,
        op(18, IMM1), 5,
        STOP,
    ]
    cpu, mem = machine(program)
    cpu.run()
    assert mem.read(50) == 7
    assert cpu.state()["sp"] == 50
    assert cpu.registers.read(5) == mem.read(51)


def test_copy_register_and_memory():
    program = [
        op(13, IMM1 | IMM2), 6, 123,
        op(19, IMM1 | IMM2), 80, -5,
        STOP,
    ]
    cpu, mem = machine(program)
    cpu.run()
    assert cpu.registers.read(6) == 123
    assert mem.read(80) == -5


def test_copy_register_out_of_range():
    cpu, _ = machine([op(13, IMM1 | IMM2), 16, 1])
    with pytest.raises(IndexError):
        cpu.cycle()


def test_unknown_opcode():
    cpu, _ = machine([op(30, IMM1 | IMM2), 0, 0])
    with pytest.raises(UnknownOpcodeError) as info:
        cpu.cycle()
    assert info.value.opcode == 30
    assert cpu.state()["pc"] == 3


def test_running_off_memory_raises():
    cpu, _ = machine([op(0, IMM1), 4], size=4)
    with pytest.raises(IndexError):
        cpu.run()


def test_debug_trace():
    out = io.StringIO()
    cpu, _ = machine([op(3, IMM1), 5, STOP], debug=True, stream=out)
    cpu.run()
    text = out.getvalue()
    assert "OPCODE: 3\t| OPD1 MODE: 2(IMMEDIATE)\nLOAD(5)\n" in text
    assert text.endswith("OPCODE: 11\t| STOP\n")


def test_no_trace_without_debug():
    out = io.StringIO()
    cpu, _ = machine([op(3, IMM1), 5, STOP], stream=out)
    cpu.run()
    assert out.getvalue() == ""


def test_print_state_format():
    out = io.StringIO()
    cpu, _ = machine([op(3, IMM1), 5, STOP], stream=out)
    cpu.run()
    cpu.print_state()
    lines = out.getvalue().splitlines()
    assert lines[0] == "CPU STATE"
    assert lines[1] == "\tacc = 0b" + format(5, "016b") + " (5)"
    assert [line.split(" =")[0].strip() for line in lines[1:]] == [
        "acc", "pc", "sp", "mop", "ri", "re", "r0", "r1",
    ]
    assert lines[4] == "\tmop = 0b" + "0" * 8


def test_run_shows_bitmap_each_cycle():
    out = io.StringIO()
    cpu, mem = machine([op(3, IMM1), 5, STOP], stream=out)
    bitmap = BitMap(mem, 100, 2, 2)
    cycles = cpu.run(bitmap)
    assert out.getvalue().count("BitMap Display\n") == cycles