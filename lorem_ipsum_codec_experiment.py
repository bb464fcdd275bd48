from huffcodec.codecs import HuffmanCodec, CompressedHuffman
from huffcodec.logger import Logger
from huffcodec.performance_display import CodeLengthDisplay
from huffcodec.settings import HuffmanCoderSettings

lorem_ipsum_1par = "Lorem ipsum dolor sit amet, consectetur adipiscing elit. Donec a consectetur ligula. Nunc erat dolor, tristique sed sagittis quis, dignissim eget erat. Vivamus enim lorem, finibus sit amet maximus eget, condimentum sit amet massa. Fusce aliquet velit sit amet ex pretium, ut tincidunt dolor semper. Nulla pellentesque eget massa quis rhoncus. Curabitur maximus quis mauris vel sollicitudin. Integer tristique ut nisl sed consequat. Donec a ipsum ut sem cursus ullamcorper. Sed finibus, sapien id volutpat tempus, turpis odio placerat purus, sit amet scelerisque nibh sem a magna. Sed justo sem, facilisis at imperdiet eu, tincidunt vel quam. Ut id sollicitudin eros, sit amet bibendum tortor. Lorem ipsum dolor sit amet, consectetur adipiscing elit."

def main():
    lorem_ipsum_bytes = str.encode(lorem_ipsum_1par)
    print(f"Sized of original data: {len(lorem_ipsum_bytes)}")

    logger = Logger()
    logger.display_info = False

    for bits_per_byte in (8, 7):
        codec = HuffmanCodec(HuffmanCoderSettings(bits_per_byte), logger)
        tree = codec.build_tree(lorem_ipsum_bytes)
        print(f"Size of textual encoding: {len(codec.encode(lorem_ipsum_bytes, tree))}")

        compressed_data = CompressedHuffman.serialize(codec.pack(lorem_ipsum_bytes))
        print(f"Size of compressed data ({bits_per_byte} bits per byte): {len(compressed_data)}")
        decompressed_data = codec.unpack(CompressedHuffman.deserialize(compressed_data))
        print(f"Size of decompressed data: {len(decompressed_data)}")

        if lorem_ipsum_bytes == decompressed_data:
            print("Data integrity preserved.")
        else:
            print("Data integrity compromised.")

    display = CodeLengthDisplay(logger.logs)
    display.generate_code_length_plot(tree, show_graph=True)
    display.generate_compression_ratio_plot(show_graph=True)

if __name__ == "__main__":
    main()
