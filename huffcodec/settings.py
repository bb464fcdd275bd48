"""
settings.py

Configuration shared across huffcodec.

"""


from .errors import InvalidArgumentError

ALPHABET_SIZE = 256
VERSION = 1
FILE_SIGNATURE = b'HUF'

DEFAULT_ENCODED_FILE = "files/encodedOut.txt"
DEFAULT_DECODED_FILE = "files/decodedOut.txt"
DEFAULT_COMPRESSED_FILE = "files/compressedOut.huf"
DEFAULT_EXTRACTED_FILE = "files/extractedOut.txt"

LEGACY_BITS_PER_BYTE = 7
PACKED_BITS_PER_BYTE = 8


class HuffmanCoderSettings:
    """
    Settings for the packed bit coder.

    bits_per_byte selects how many code digits go into each output byte:
    8 for full packing, 7 for the legacy layout where the high bit of every
    byte stays zero.
    """

    def __init__(self, bits_per_byte: int = PACKED_BITS_PER_BYTE) -> None:
        if bits_per_byte not in (LEGACY_BITS_PER_BYTE, PACKED_BITS_PER_BYTE):
            raise InvalidArgumentError(
                f"bits_per_byte must be {LEGACY_BITS_PER_BYTE} or {PACKED_BITS_PER_BYTE}, got {bits_per_byte}")
        self.bits_per_byte: int = bits_per_byte

    def __repr__(self) -> str:
        return f"HuffmanCoderSettings(bits_per_byte={self.bits_per_byte})"
