#experiments.py
import os
import time

from .codecs import HuffmanCodecFile
from .logger import Logger
from .settings import HuffmanCoderSettings, PACKED_BITS_PER_BYTE


class HuffmanExperiment:
    def __init__(self, name: str, input_file_path, experiment_root_folder_path, bits_per_byte=PACKED_BITS_PER_BYTE):

        self.name = name

        #validate that input file exists and can be read
        if not os.path.exists(input_file_path):
            raise FileNotFoundError(f"File {input_file_path} not found.")
        if not os.access(input_file_path, os.R_OK):
            raise PermissionError(f"File {input_file_path} is not readable.")

        self.input_file_path = input_file_path

        #attempt to create experiment folder
        self.experiment_folder_path = os.path.join(experiment_root_folder_path, name)
        if not os.path.exists(self.experiment_folder_path):
            os.makedirs(self.experiment_folder_path)

        input_file_name = os.path.basename(input_file_path)
        self.compressed_file_path = os.path.join(self.experiment_folder_path, f"{input_file_name}.huf")
        self.decompressed_file_path = os.path.join(self.experiment_folder_path, f"{input_file_name}_decompressed")

        self.logger = Logger()
        self.codec = HuffmanCodecFile(HuffmanCoderSettings(bits_per_byte), self.logger)

    def run(self):
        self.input_file_size = os.path.getsize(self.input_file_path)

        self.compression_start_time = time.time()
        self.codec.compress_file(self.input_file_path, self.compressed_file_path)
        self.compression_end_time = time.time()

        self.decompression_start_time = time.time()
        self.codec.decompress_file(self.compressed_file_path, self.decompressed_file_path)
        self.decompression_end_time = time.time()

        self.compressed_file_size = os.path.getsize(self.compressed_file_path)
        self.decompressed_file_size = os.path.getsize(self.decompressed_file_path)

        self.compression_ratio = self.input_file_size / self.compressed_file_size
        self.compression_time = self.compression_end_time - self.compression_start_time
        self.decompression_time = self.decompression_end_time - self.decompression_start_time

        with open(self.input_file_path, 'rb') as original, open(self.decompressed_file_path, 'rb') as restored:
            self.integrity_preserved = original.read() == restored.read()

        self.logger.save(os.path.join(self.experiment_folder_path, "log.txt"))
        return self.compression_ratio

    def __str__(self):
        return (f"{self.name}: {self.input_file_size} -> {self.compressed_file_size} bytes, "
                f"ratio {self.compression_ratio:.3f}, "
                f"compression {self.compression_time:.3f}s, decompression {self.decompression_time:.3f}s, "
                f"integrity {'preserved' if self.integrity_preserved else 'compromised'}")
