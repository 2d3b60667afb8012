"""
Prover Stdin & Program IO

The host writes typed values into a ProverStdin; the program reads them
back, in the same order, through ProgramIO and commits its public output.
Reads are typed: asking for a u32 where bytes were written is an error,
as is reading past the last value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from core.abi import UINT32_MAX
from core.schemas.errors import StdinReadError

StdinValue = Union[bytes, int]

# Fixed per-read cost in the execution metric, on top of one unit per byte
READ_OVERHEAD = 16


@dataclass
class ProverStdin:
    """Ordered, typed input buffer handed to the program."""

    values: list[StdinValue] = field(default_factory=list)

    def write(self, value: StdinValue) -> "ProverStdin":
        """
        Append a value.

        Args:
            value: bytes (or bytearray) or a uint32

        Raises:
            TypeError: For any other type
            ValueError: For integers outside uint32
        """
        if isinstance(value, (bytes, bytearray)):
            self.values.append(bytes(value))
        elif isinstance(value, int) and not isinstance(value, bool):
            if not 0 <= value <= UINT32_MAX:
                raise ValueError(f"Integer stdin values must be uint32, got {value}")
            self.values.append(value)
        else:
            raise TypeError(f"Unsupported stdin value type: {type(value).__name__}")
        return self

    @classmethod
    def for_dkim(
        cls,
        pubkey: bytes,
        signature: bytes,
        email_header: bytes,
        max_headers_length: int,
    ) -> "ProverStdin":
        """Write the DKIM program inputs in their fixed read order."""
        stdin = cls()
        stdin.write(pubkey)
        stdin.write(signature)
        stdin.write(email_header)
        stdin.write(max_headers_length)
        return stdin

    @property
    def total_bytes(self) -> int:
        return sum(len(v) if isinstance(v, bytes) else 4 for v in self.values)


class ProgramIO:
    """Program-side view of stdin plus the committed public output."""

    def __init__(self, stdin: ProverStdin):
        self._values = list(stdin.values)
        self._cursor = 0
        self._committed = bytearray()
        self.cycles = 0

    def _next(self, expected: type) -> StdinValue:
        if self._cursor >= len(self._values):
            raise StdinReadError(
                f"Stdin exhausted after {self._cursor} values",
                position=self._cursor,
            )
        value = self._values[self._cursor]
        if not isinstance(value, expected):
            raise StdinReadError(
                f"Expected {expected.__name__} at stdin position {self._cursor}, "
                f"got {type(value).__name__}",
                position=self._cursor,
            )
        self._cursor += 1
        return value

    def read_bytes(self) -> bytes:
        value = self._next(bytes)
        self.charge(READ_OVERHEAD + len(value))
        return value

    def read_u32(self) -> int:
        value = self._next(int)
        self.charge(READ_OVERHEAD + 4)
        return value

    def commit_slice(self, data: bytes) -> None:
        """Append bytes to the public output."""
        self._committed.extend(data)
        self.charge(len(data))

    def charge(self, cycles: int) -> None:
        self.cycles += cycles

    @property
    def committed(self) -> bytes:
        return bytes(self._committed)

    @property
    def values_read(self) -> int:
        return self._cursor


__all__ = [
    "StdinValue",
    "ProverStdin",
    "ProgramIO",
]
