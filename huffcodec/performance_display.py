import matplotlib.pyplot as plt
import numpy as np

from .models import HuffmanTree

class CodeLengthDisplay:
    def __init__(self, logs=None,
                 fig_size=(10, 6), dpi=100, font_size=12,
                 bar_color='blue', bar_alpha=0.6,
                 line_color='red', line_linewidth=2):
        self.logs = logs if logs is not None else []
        self.fig_size = fig_size
        self.dpi = dpi
        self.font_size = font_size
        self.bar_color = bar_color
        self.bar_alpha = bar_alpha
        self.line_color = line_color
        self.line_linewidth = line_linewidth

    def _finish(self, title, xlabel, ylabel, show_graph=False, save_path=None):
        plt.title(title, fontsize=self.font_size + 2)
        plt.xlabel(xlabel, fontsize=self.font_size)
        plt.ylabel(ylabel, fontsize=self.font_size)
        plt.grid(True)
        plt.legend(fontsize=self.font_size)
        plt.tight_layout()

        if save_path:
            plt.savefig(save_path)
        if show_graph:
            plt.show()
        plt.close()

    def code_lengths(self, tree: HuffmanTree):
        """Present symbols with their frequencies and code lengths, most frequent first."""
        items = sorted(tree.code_table.items(), key=lambda item: -tree.frequencies.count(item[0]))
        symbols = np.array([symbol for symbol, _ in items])
        frequencies = np.array([tree.frequencies.count(symbol) for symbol, _ in items])
        lengths = np.array([len(code) for _, code in items])
        return symbols, frequencies, lengths

    def generate_code_length_plot(self, tree: HuffmanTree, show_graph=False, save_path=None):
        symbols, frequencies, lengths = self.code_lengths(tree)
        x = np.arange(len(symbols))

        plt.figure(figsize=self.fig_size, dpi=self.dpi)
        ax = plt.gca()
        ax.bar(x, frequencies, color=self.bar_color, alpha=self.bar_alpha, label="Frequency")
        ax.set_xticks(x)
        ax.set_xticklabels([repr(chr(s)) if 32 <= s < 127 else str(s) for s in symbols], rotation=90)
        lengths_ax = ax.twinx()
        lengths_ax.plot(x, lengths, color=self.line_color, linewidth=self.line_linewidth, label="Code length")
        lengths_ax.set_ylabel("Code length (bits)", fontsize=self.font_size)
        plt.sca(ax)
        self._finish("Symbol Frequency and Code Length", "Symbol", "Frequency", show_graph, save_path)

    def compression_ratios(self):
        ratios = []
        for log in self.logs:
            if hasattr(log, 'symbol_size') and hasattr(log, 'encoded_size'):
                ratios.append(log.symbol_size / log.encoded_size if log.encoded_size != 0 else 0)
        return ratios

    def generate_compression_ratio_plot(self, show_graph=False, save_path=None):
        values = self.compression_ratios()
        if not values:
            print("No data available for Compression Ratio.")
            return

        x = np.arange(1, len(values) + 1)
        plt.figure(figsize=self.fig_size, dpi=self.dpi)
        plt.bar(x, values, color=self.bar_color, alpha=self.bar_alpha, label="Input size / output size")
        self._finish("Compression Ratio", "Log Entry Order", "Ratio", show_graph, save_path)
