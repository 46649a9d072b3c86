# mkctx/fence.py
"""
Code-fence negotiation.

A fence one backtick longer than the longest backtick run in the content
(and never shorter than three) cannot be closed early by that content.
"""

from pathlib import Path
from typing import BinaryIO, Union

from .config import FENCE_CHAR, MIN_FENCE_LENGTH, SCAN_BUFFER_SIZE


class RunCounter:
    """Tracks the longest run of one byte across successive chunks."""

    def __init__(self, char: bytes = FENCE_CHAR):
        self.char = char[0]
        self.run = 0
        self.longest = 0

    def feed(self, chunk: bytes) -> None:
        run, longest, char = self.run, self.longest, self.char
        for byte in chunk:
            if byte == char:
                run += 1
                if run > longest:
                    longest = run
            else:
                run = 0
        self.run, self.longest = run, longest


def longest_run_in_bytes(data: bytes, char: bytes = FENCE_CHAR) -> int:
    counter = RunCounter(char)
    counter.feed(data)
    return counter.longest


def longest_run_in_stream(stream: BinaryIO, char: bytes = FENCE_CHAR,
                          buffer_size: int = SCAN_BUFFER_SIZE) -> int:
    """Single pass over ``stream`` with a fixed-size buffer."""
    counter = RunCounter(char)
    while True:
        chunk = stream.read(buffer_size)
        if not chunk:
            return counter.longest
        counter.feed(chunk)


def longest_run_in_file(path: Union[str, Path], char: bytes = FENCE_CHAR) -> int:
    with open(path, "rb") as f:
        return longest_run_in_stream(f, char)


def fence_length(longest_run: int) -> int:
    return max(longest_run + 1, MIN_FENCE_LENGTH)


def fence_for(longest_run: int, char: bytes = FENCE_CHAR) -> bytes:
    return char * fence_length(longest_run)
