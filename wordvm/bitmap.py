"""A text view of a rectangular block of memory."""

import sys
from typing import Optional, TextIO

from wordvm.memory import Memory


class BitMap:
    """Shows ``width`` x ``height`` words of memory starting at ``start_index``."""

    def __init__(self, memory: Memory, start_index: int, width: int, height: int) -> None:
        if start_index + width * height > len(memory):
            raise IndexError("Not enough space")
        self.memory = memory
        self.start_index = start_index
        self.width = width
        self.height = height

    def render(self) -> str:
        """Return the display as text, one row per line."""
        lines = ["BitMap Display\n"]
        for row in range(self.height):
            base = self.start_index + row * self.height
            cells = "".join(f"{self.memory.read(base + col)}\t" for col in range(self.width))
            lines.append(f"| {cells} |\n")
        return "".join(lines)

    def show(self, stream: Optional[TextIO] = None) -> None:
        """Write the display to ``stream`` (standard output by default)."""
        (stream if stream is not None else sys.stdout).write(self.render())