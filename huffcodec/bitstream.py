"""
bitstream.py

Bit level readers and writers over binary streams.

"""


from typing import IO

from .errors import InvalidArgumentError
from .settings import PACKED_BITS_PER_BYTE


class BitOutputStream:
    """
    A helper class to write bits to an underlying binary stream.
    """

    def __init__(self, out: IO[bytes], bits_per_byte: int = PACKED_BITS_PER_BYTE) -> None:
        """
        Initialize with an underlying output stream (e.g., a file opened in binary mode).

        Args:
            out (IO[bytes]): The output stream.
            bits_per_byte (int): How many bits fill one output byte.
        """
        if not 1 <= bits_per_byte <= 8:
            raise InvalidArgumentError("bits_per_byte must be between 1 and 8")
        self.out: IO[bytes] = out
        self.bits_per_byte: int = bits_per_byte
        self.current_byte: int = 0
        self.num_bits_filled: int = 0
        self.bits_written: int = 0

    def write(self, bit: int) -> None:
        """
        Write a single bit (0 or 1) to the stream.

        Args:
            bit (int): The bit to write.

        Raises:
            InvalidArgumentError: If the bit is not 0 or 1.
        """
        if bit not in (0, 1):
            raise InvalidArgumentError("Bit must be 0 or 1")
        self.current_byte = (self.current_byte << 1) | bit
        self.num_bits_filled += 1
        self.bits_written += 1
        if self.num_bits_filled == self.bits_per_byte:
            self.flush_current_byte()

    def flush_current_byte(self) -> None:
        """
        Write the current byte to the underlying stream and reset the buffer.
        """
        self.out.write(bytes((self.current_byte,)))
        self.current_byte = 0
        self.num_bits_filled = 0

    def finish(self) -> None:
        """
        Flush any remaining bits to the stream by padding with zeros.
        """
        if self.num_bits_filled > 0:
            self.current_byte = self.current_byte << (self.bits_per_byte - self.num_bits_filled)
            self.flush_current_byte()
        self.out.flush()

    def close(self) -> None:
        """
        Finish writing and close the underlying stream.
        """
        self.finish()
        self.out.close()


class BitInputStream:
    """
    A helper class to read bits from an underlying binary stream.
    """

    def __init__(self, inp: IO[bytes], bits_per_byte: int = PACKED_BITS_PER_BYTE) -> None:
        """
        Initialize with an underlying input stream (e.g., a file opened in binary mode).

        Args:
            inp (IO[bytes]): The input stream.
            bits_per_byte (int): How many low-order bits of each byte carry data.
        """
        if not 1 <= bits_per_byte <= 8:
            raise InvalidArgumentError("bits_per_byte must be between 1 and 8")
        self.inp: IO[bytes] = inp
        self.bits_per_byte: int = bits_per_byte
        self.current_byte: int = 0
        self.num_bits_remaining: int = 0

    def read(self) -> int:
        """
        Read a single bit from the stream.

        Returns:
            int: 0 or 1 for a valid bit, or -1 if no more bits are available.
        """
        if self.num_bits_remaining == 0:
            byte = self.inp.read(1)
            if len(byte) == 0:
                return -1
            self.current_byte = byte[0]
            self.num_bits_remaining = self.bits_per_byte
        self.num_bits_remaining -= 1
        return (self.current_byte >> self.num_bits_remaining) & 1

    def close(self) -> None:
        """
        Close the underlying input stream.
        """
        self.inp.close()
