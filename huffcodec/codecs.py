import struct
from typing import Optional

from .validators import validate_type, validate_not_blank, validate_file_exists
from .coders import TextCoder, PackedCoder
from .errors import EmptyInputError, InvalidArgumentError, StreamCorruptionError, UnimplementedPathError
from .file_handler import read_all, write_all
from .logger import Logger, StatusLog, log_to
from .models import FrequencyTable, HuffmanTree, PackedBits
from .settings import (
    ALPHABET_SIZE,
    FILE_SIGNATURE,
    VERSION,
    DEFAULT_ENCODED_FILE,
    DEFAULT_DECODED_FILE,
    DEFAULT_COMPRESSED_FILE,
    DEFAULT_EXTRACTED_FILE,
    LEGACY_BITS_PER_BYTE,
    PACKED_BITS_PER_BYTE,
    HuffmanCoderSettings,
)
from .tree import build_tree, build_tree_from_data

FREQUENCY_TABLE_SIZE = ALPHABET_SIZE * 4


class CompressedHuffman:
    """Represents a compressed file together with everything needed to decode it."""

    def __init__(
        self,
        bits_per_byte: int,
        bit_count: int,
        frequencies: FrequencyTable,
        data: bytes,
        version: int = VERSION,
        original_file_name: Optional[str] = None,
    ) -> None:
        validate_type(bits_per_byte, "Bits per byte", int)
        validate_type(bit_count, "Bit count", int)
        validate_type(frequencies, "Frequencies", FrequencyTable)
        validate_type(data, "Data", bytes)
        validate_type(version, "Version", int)
        if original_file_name is not None:
            validate_type(original_file_name, "Original file name", str)

        if version != VERSION:
            raise ValueError("Version not supported")
        if bits_per_byte not in (LEGACY_BITS_PER_BYTE, PACKED_BITS_PER_BYTE):
            raise ValueError("Bits per byte not supported")
        if bit_count < 0:
            raise ValueError("Bit count must be non-negative")

        self.bits_per_byte = bits_per_byte
        self.bit_count = bit_count
        self.frequencies = frequencies
        self.data = data
        self.version = version
        self.original_file_name = original_file_name

    def packed_bits(self) -> PackedBits:
        return PackedBits(self.data, self.bit_count, self.bits_per_byte)

    @staticmethod
    def serialize(model: 'CompressedHuffman') -> bytes:
        """
        Serialize a CompressedHuffman instance into bytes.

        The format:
          - signature (3 bytes, b'HUF')
          - version (2 bytes, big endian)
          - bits_per_byte (1 byte, unsigned char)
          - bit_count (8 bytes, unsigned long long)
          - frequency table (256 x 4 bytes, unsigned int)
          - data length (4 bytes, unsigned int)
          - data (variable length)
          - original_file_name length (4 bytes, unsigned int; 0 if None)
          - original_file_name (UTF-8 encoded, if present)
        """
        file_name_bytes = (
            model.original_file_name.encode("utf-8") if model.original_file_name is not None else b""
        )

        serialized = FILE_SIGNATURE
        serialized += model.version.to_bytes(2, "big")
        serialized += struct.pack("<BQ", model.bits_per_byte, model.bit_count)
        serialized += model.frequencies.to_bytes()
        serialized += struct.pack("<I", len(model.data))
        serialized += model.data
        serialized += struct.pack("<I", len(file_name_bytes))
        serialized += file_name_bytes

        return serialized

    @staticmethod
    def deserialize(serialized: bytes) -> 'CompressedHuffman':
        """
        Deserialize bytes into a CompressedHuffman instance.
        The byte structure is expected to be the same as produced by serialize().
        """
        if len(serialized) < 5:
            raise StreamCorruptionError("Serialized data is too short")
        if serialized[:3] != FILE_SIGNATURE:
            raise StreamCorruptionError("Invalid file signature")
        version = int.from_bytes(serialized[3:5], "big")
        if version != VERSION:
            raise StreamCorruptionError("Incompatible version")
        offset = 5

        if len(serialized) < offset + 9:
            raise StreamCorruptionError("Serialized data is incomplete for bit count")
        bits_per_byte, bit_count = struct.unpack("<BQ", serialized[offset : offset + 9])
        offset += 9

        if len(serialized) < offset + FREQUENCY_TABLE_SIZE:
            raise StreamCorruptionError("Serialized data is incomplete for frequency table")
        frequencies = FrequencyTable.from_bytes(serialized[offset : offset + FREQUENCY_TABLE_SIZE])
        offset += FREQUENCY_TABLE_SIZE

        if len(serialized) < offset + 4:
            raise StreamCorruptionError("Serialized data is incomplete for data length")
        data_length, = struct.unpack("<I", serialized[offset : offset + 4])
        offset += 4

        if len(serialized) < offset + data_length:
            raise StreamCorruptionError("Serialized data is incomplete for data")
        data = serialized[offset : offset + data_length]
        offset += data_length

        if len(serialized) < offset + 4:
            raise StreamCorruptionError("Serialized data is incomplete for file name length")
        file_name_length, = struct.unpack("<I", serialized[offset : offset + 4])
        offset += 4
        if len(serialized) < offset + file_name_length:
            raise StreamCorruptionError("Serialized data is incomplete for file name")
        if file_name_length > 0:
            try:
                original_file_name = serialized[offset : offset + file_name_length].decode("utf-8")
            except UnicodeDecodeError as e:
                raise StreamCorruptionError(f"Original file name is not valid UTF-8: {e}") from e
        else:
            original_file_name = None

        try:
            return CompressedHuffman(bits_per_byte, bit_count, frequencies, data, version, original_file_name)
        except ValueError as e:
            raise StreamCorruptionError(f"Invalid header field: {e}") from e


class CompressedHuffmanFile:
    """Provides methods to write and read a CompressedHuffman instance to/from a file."""

    @staticmethod
    def write_to_file(model: CompressedHuffman, file_path: str) -> None:
        """
        Serialize the model and write it as binary data to the given file.

        Args:
            model (CompressedHuffman): The compressed model to write.
            file_path (str): The path to the output file.
        """
        write_all(file_path, CompressedHuffman.serialize(model))

    @staticmethod
    def read_from_file(file_path: str) -> CompressedHuffman:
        """
        Read binary data from the given file and deserialize it into a CompressedHuffman instance.

        Args:
            file_path (str): The path to the compressed file.

        Returns:
            CompressedHuffman: The deserialized compressed model.
        """
        return CompressedHuffman.deserialize(read_all(file_path))


class HuffmanCodec:
    """
    Frequency counting, tree construction and the four Huffman transforms.

    Every transform takes the HuffmanTree built from the input it codes, so
    independent codecs never share state.
    """

    def __init__(self, settings: Optional[HuffmanCoderSettings] = None, logger: Optional[Logger] = None) -> None:
        self.settings: HuffmanCoderSettings = settings if settings is not None else HuffmanCoderSettings()
        self.logger: Optional[Logger] = logger
        self._text_coder = TextCoder(logger)
        self._packed_coder = PackedCoder(self.settings, logger)

    def count_frequencies(self, data: bytes) -> FrequencyTable:
        return FrequencyTable.from_data(data)

    def build_tree(self, data: bytes) -> HuffmanTree:
        """
        Build the tree and code table for data.

        Raises:
            EmptyInputError: If data is empty.
        """
        return build_tree_from_data(data, self.logger)

    def encode(self, data: bytes, tree: HuffmanTree) -> bytes:
        """
        Encode data as one ASCII '0' or '1' byte per code digit.

        Args:
            data (bytes): The data to encode.
            tree (HuffmanTree): The tree built from data.

        Returns:
            bytes: The textual bit sequence.
        """
        log_to(self.logger, StatusLog("Encoding..."))
        return self._text_coder.encode(data, tree)

    def decode(self, encoded: bytes, tree: HuffmanTree) -> bytes:
        """
        Decode a textual bit sequence.

        Raises:
            StreamCorruptionError: If the sequence holds other bytes than '0'
                and '1' or stops inside a code word.
        """
        log_to(self.logger, StatusLog("Decoding..."))
        return self._text_coder.decode(encoded, tree)

    def compress(self, data: bytes, tree: HuffmanTree) -> PackedBits:
        """
        Pack the code digits of data into bytes.

        Args:
            data (bytes): The data to compress.
            tree (HuffmanTree): The tree built from data.

        Returns:
            PackedBits: The packed bytes and the number of meaningful bits.
        """
        log_to(self.logger, StatusLog("Compressing..."))
        return self._packed_coder.encode(data, tree)

    def decompress(self, packed: PackedBits, tree: HuffmanTree) -> bytes:
        """
        Unpack and decode exactly packed.bit_count bits; padding is ignored.

        Raises:
            StreamCorruptionError: If the bits stop inside a code word or the
                bit count exceeds the packed data.
        """
        log_to(self.logger, StatusLog("Extracting..."))
        return self._packed_coder.decode(packed, tree)

    def pack(self, data: bytes, original_file_name: Optional[str] = None) -> CompressedHuffman:
        """
        Compress data into a self describing CompressedHuffman.

        Args:
            data (bytes): The data to compress.
            original_file_name (Optional[str]): Stored alongside the data.

        Returns:
            CompressedHuffman: The resulting compressed model.
        """
        tree = self.build_tree(data)
        packed = self.compress(data, tree)
        return CompressedHuffman(
            packed.bits_per_byte,
            packed.bit_count,
            tree.frequencies,
            packed.data,
            original_file_name=original_file_name,
        )

    def unpack(self, model: CompressedHuffman) -> bytes:
        """
        Rebuild the tree from the stored frequencies and decompress.

        Args:
            model (CompressedHuffman): The compressed model.

        Returns:
            bytes: The decompressed data.
        """
        if not isinstance(model, CompressedHuffman):
            raise ValueError("Input must be a CompressedHuffman instance")
        tree = build_tree(model.frequencies, self.logger)
        data = self.decompress(model.packed_bits(), tree)
        if len(data) != model.frequencies.total():
            raise StreamCorruptionError("Decompressed size does not match the stored frequencies")
        return data


class HuffmanCodecFile(HuffmanCodec):
    def compress_file(self, input_path: str, output_path: str) -> CompressedHuffman:
        """
        Compress the input file and write the compressed model to an output file.

        Args:
            input_path (str): Path to the input file.
            output_path (str): Path to the output file.
        """
        validate_type(input_path, "Input path", str)
        validate_type(output_path, "Output path", str)
        validate_file_exists(input_path)

        data = read_all(input_path)
        model = self.pack(data, original_file_name=input_path)
        CompressedHuffmanFile.write_to_file(model, output_path)
        return model

    def decompress_file(self, compressed_file_path: str, output_file_path: str) -> bytes:
        """
        Decompress the input file and write the decompressed data to an output file.

        Args:
            compressed_file_path (str): Path to the compressed file.
            output_file_path (str): Path to the output file.
        """
        validate_type(compressed_file_path, "Compressed file path", str)
        validate_type(output_file_path, "Output file path", str)
        validate_file_exists(compressed_file_path)

        model = CompressedHuffmanFile.read_from_file(compressed_file_path)
        data = self.unpack(model)
        write_all(output_file_path, data)
        return data


class HuffmanSession:
    """
    Codes one input file into its textual and packed forms and restores them.

    Only the output written by this session can be decoded or extracted,
    since neither form stores the tree. The textual and packed outputs go
    to separate files so both can be restored.
    """

    def __init__(
        self,
        in_file_name: str,
        out_file_name: str = "",
        compressed_file_name: str = "",
        decoded_file_name: str = DEFAULT_DECODED_FILE,
        extracted_file_name: str = DEFAULT_EXTRACTED_FILE,
        settings: Optional[HuffmanCoderSettings] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        validate_not_blank(in_file_name, "The file name")
        validate_type(out_file_name, "Output file name", str)
        validate_type(compressed_file_name, "Compressed file name", str)
        validate_not_blank(decoded_file_name, "Decoded file name")
        validate_not_blank(extracted_file_name, "Extracted file name")

        self.in_file_name = in_file_name
        self.out_file_name = out_file_name if out_file_name.strip() else DEFAULT_ENCODED_FILE
        self.compressed_file_name = compressed_file_name if compressed_file_name.strip() else DEFAULT_COMPRESSED_FILE
        if self.out_file_name == self.compressed_file_name:
            raise InvalidArgumentError("The textual and packed outputs need different file names")
        self.decoded_file_name = decoded_file_name
        self.extracted_file_name = extracted_file_name
        self.logger = logger
        self.codec = HuffmanCodec(settings, logger)

        self.text: bytes = read_all(in_file_name)
        self.tree: Optional[HuffmanTree] = None
        self.encoded_path: Optional[str] = None
        self.compressed_path: Optional[str] = None
        self.bit_count: Optional[int] = None

    def _initialize(self) -> HuffmanTree:
        if not self.text:
            raise EmptyInputError(f"{self.in_file_name} is empty")
        if self.tree is None:
            log_to(self.logger, StatusLog("Initializing E/C..."))
            self.tree = self.codec.build_tree(self.text)
        return self.tree

    def encode(self) -> str:
        """
        Write the textual encoding of the input.

        Returns:
            str: The path written to.
        """
        tree = self._initialize()
        write_all(self.out_file_name, self.codec.encode(self.text, tree))
        self.encoded_path = self.out_file_name
        return self.encoded_path

    def decode(self) -> bytes:
        """
        Decode the file written by encode() into the decoded file.

        Returns:
            bytes: The decoded data.
        """
        if self.encoded_path is None:
            raise UnimplementedPathError("Only the output of encode() can be decoded")
        decoded = self.codec.decode(read_all(self.encoded_path), self.tree)
        self._verify(decoded)
        write_all(self.decoded_file_name, decoded)
        return decoded

    def compress(self) -> str:
        """
        Write the packed encoding of the input.

        Returns:
            str: The path written to.
        """
        tree = self._initialize()
        packed = self.codec.compress(self.text, tree)
        write_all(self.compressed_file_name, packed.data)
        self.compressed_path = self.compressed_file_name
        self.bit_count = packed.bit_count
        return self.compressed_path

    def extract(self) -> bytes:
        """
        Extract the file written by compress() into the extracted file.

        Returns:
            bytes: The extracted data.
        """
        if self.compressed_path is None:
            raise UnimplementedPathError("Only the output of compress() can be extracted")
        packed = PackedBits(read_all(self.compressed_path), self.bit_count, self.codec.settings.bits_per_byte)
        extracted = self.codec.decompress(packed, self.tree)
        self._verify(extracted)
        write_all(self.extracted_file_name, extracted)
        return extracted

    def decode_file(self, file_path: str) -> bytes:
        raise UnimplementedPathError(f"Decoding {file_path} needs the tree it was encoded with")

    def extract_file(self, file_path: str) -> bytes:
        raise UnimplementedPathError(f"Extracting {file_path} needs the tree it was compressed with")

    def _verify(self, restored: bytes) -> None:
        if restored != self.text:
            raise StreamCorruptionError("Restored data does not match the input")
