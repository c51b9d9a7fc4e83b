"""Métricas de compresión para la CLI, el informe y la API.

Este módulo expone:
    - shannon_entropy(freqs)
    - compression_stats(data, compressed=None, code=None)
"""

import math
from typing import Dict, Optional

import numpy as np

from .bits_utils import bits_entropy_stats, bytes_to_bits
from .codec import encode
from .header import read_header
from .huffman import ALPHABET_SIZE, average_code_length, build_code_table, build_tree


def shannon_entropy(freqs) -> float:
    """Entropía de la fuente en bits/símbolo, sólo sobre los bytes literales."""
    f = np.asarray(freqs[:ALPHABET_SIZE], dtype=np.float64)
    total = f.sum()
    if total == 0:
        return 0.0
    p = f[f > 0] / total
    return float(-(p * np.log2(p)).sum())


def compression_stats(data: bytes, compressed: Optional[bytes] = None,
                      code: Optional[Dict[int, str]] = None) -> Dict[str, float]:
    """
    Métricas de compresión de 'data'. Si ya se tiene la salida de encode
    (y su tabla de códigos) se pasan para no volver a comprimir.
    """
    data = bytes(data)
    if compressed is None:
        compressed = encode(data)
    freqs, offset = read_header(compressed)
    if code is None:
        code = build_code_table(build_tree(freqs))

    original_size = len(data)
    compressed_size = len(compressed)
    payload = compressed[offset:]

    if original_size > 0:
        ratio = compressed_size / original_size
        saving_pct = 100.0 * (1.0 - ratio)
    else:
        ratio = float("nan")
        saving_pct = float("nan")

    H = shannon_entropy(freqs)
    Lavg = average_code_length(code, freqs)
    efficiency = H / Lavg if Lavg and not math.isnan(Lavg) else float("nan")

    p0, p1, bit_H, bit_var = bits_entropy_stats(bytes_to_bits(payload))

    return {
        "original_size": original_size,
        "compressed_size": compressed_size,
        "header_size": offset,
        "payload_size": len(payload),
        "ratio": ratio,
        "saving_pct": saving_pct,
        "entropy": H,
        "avg_code_length": Lavg,
        "efficiency": efficiency,
        "distinct_symbols": int(np.count_nonzero(freqs[:ALPHABET_SIZE])),
        "p0": p0,
        "p1": p1,
        "bit_entropy": bit_H,
        "bit_var": bit_var,
    }
