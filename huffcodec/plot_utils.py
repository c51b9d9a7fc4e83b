import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from typing import Dict

from .huffman import ALPHABET_SIZE


def save_symbol_hist(freqs, title: str, fname: str, dpi: int = 140):
    """Frecuencia de cada byte 0..255 (una figura, sin estilos de color explícitos)."""
    f = np.asarray(freqs[:ALPHABET_SIZE])
    plt.figure()
    plt.bar(np.arange(ALPHABET_SIZE), f, width=1.0)
    plt.xlim(-1, ALPHABET_SIZE)
    plt.xlabel('Byte')
    plt.ylabel('Frecuencia')
    plt.title(title)
    plt.tight_layout()
    plt.savefig(fname, dpi=dpi)
    plt.close()


def save_code_lengths(code: Dict[int, str], title: str, fname: str, dpi: int = 140):
    """Cuántos símbolos tienen cada longitud de código (EOS incluido)."""
    lengths = np.array([len(c) for c in code.values()], dtype=int)
    values, counts = np.unique(lengths, return_counts=True)
    plt.figure()
    plt.bar(values, counts)
    plt.xticks(values)
    plt.xlabel('Longitud de código [bits]')
    plt.ylabel('Símbolos')
    plt.title(title)
    plt.tight_layout()
    plt.savefig(fname, dpi=dpi)
    plt.close()


def plot_hist_bits(bits, title, fname, dpi: int = 140):
    """Histograma de bits (conteo de 0/1)."""
    bits = np.array(bits, dtype=np.uint8)
    counts = [np.sum(bits == 0), np.sum(bits == 1)]
    plt.figure()
    plt.bar([0, 1], counts)
    plt.xticks([0, 1], ['0', '1'])
    plt.xlabel('Bit')
    plt.ylabel('Frecuencia')
    plt.title(title)
    plt.tight_layout()
    plt.savefig(fname, dpi=dpi)
    plt.close()
