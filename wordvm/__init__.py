"""A small signed 16-bit word virtual machine: memory, registers, decoding, CPU and a text bitmap view."""

__version__ = "0.1.0"