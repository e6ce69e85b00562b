import re
from bisect import bisect_right
from collections.abc import Sequence

_LINE_TERMINATOR = re.compile(r"\r\n|\r|\n")


class LineTable:
    """Maps absolute character offsets of one document to zero-based (line, column) pairs.

    Each line's width includes its terminator (``\\r\\n`` counts two characters).
    The final line has no terminator but is still widened by one, so an offset at
    the very end of the text stays on the last line.
    """

    def __init__(self, widths: Sequence[int]) -> None:
        if not widths:
            raise ValueError("A line table needs at least one line.")
        self.widths: tuple[int, ...] = tuple(widths)
        starts = [0]
        for width in self.widths[:-1]:
            starts.append(starts[-1] + width)
        self._starts = starts

    @classmethod
    def build(cls, text: str) -> "LineTable":
        widths: list[int] = []
        line_start = 0
        for match in _LINE_TERMINATOR.finditer(text):
            widths.append(match.end() - line_start)
            line_start = match.end()
        widths.append(len(text) - line_start + 1)
        return cls(widths)

    @property
    def line_count(self) -> int:
        return len(self.widths)

    def locate(self, offset: int) -> tuple[int, int]:
        """Return the (line, column) of *offset*.

        Offsets past the end of the text resolve to the last line with an
        overlong column rather than raising.
        """
        assert offset >= 0, f"negative offset {offset}"
        line = bisect_right(self._starts, offset) - 1
        return line, offset - self._starts[line]

    def offset_of(self, line: int, column: int) -> int:
        return self._starts[line] + column
