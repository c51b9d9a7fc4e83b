"""Cabecera de texto con la tabla de frecuencias.

Formato: una línea con C (símbolos activos) y luego C líneas "simbolo frecuencia",
todo en decimal y terminado en '\\n'. El último '\\n' separa la cabecera de la
sección de bits empaquetados, que empieza justo detrás.
"""

import re
from typing import Tuple

import numpy as np

from .errors import CorruptHeaderError
from .huffman import ALPHABET_SIZE

# A lo sumo 19 dígitos: cualquier valor válido cabe en int64
_COUNT_RE = re.compile(rb"\d{1,19}")
_ENTRY_RE = re.compile(rb"(\d{1,19}) (\d{1,19})")
_MAX_FREQ = int(np.iinfo(np.int64).max)


def write_header(freqs) -> bytes:
    active = [(s, int(f)) for s, f in enumerate(freqs) if f > 0]
    lines = [f"{len(active)}\n"]
    lines.extend(f"{s} {f}\n" for s, f in active)
    return "".join(lines).encode("ascii")


def _next_line(data: bytes, pos: int) -> Tuple[bytes, int]:
    end = data.find(b"\n", pos)
    if end < 0:
        raise CorruptHeaderError(f"cabecera truncada en el byte {pos}")
    return data[pos:end], end + 1


def read_header(data: bytes) -> Tuple[np.ndarray, int]:
    """
    Reconstruye la tabla de frecuencias desde el inicio de 'data'.
    Devuelve (freqs, offset) con offset = primer byte de la sección de bits.
    """
    line, pos = _next_line(data, 0)
    if not _COUNT_RE.fullmatch(line):
        raise CorruptHeaderError(f"número de símbolos inválido: {line[:32]!r}")
    count = int(line)
    if count > ALPHABET_SIZE + 1:
        raise CorruptHeaderError(f"la cabecera declara {count} símbolos (máximo {ALPHABET_SIZE + 1})")

    freqs = np.zeros(ALPHABET_SIZE + 1, dtype=np.int64)
    for i in range(count):
        line, pos = _next_line(data, pos)
        m = _ENTRY_RE.fullmatch(line)
        if not m:
            raise CorruptHeaderError(f"entrada {i} inválida: {line[:32]!r}")
        sym, freq = int(m.group(1)), int(m.group(2))
        if sym > ALPHABET_SIZE:
            raise CorruptHeaderError(f"símbolo fuera de rango: {sym}")
        if freq == 0 or freq > _MAX_FREQ:
            raise CorruptHeaderError(f"frecuencia inválida para el símbolo {sym}: {freq}")
        if freqs[sym]:
            raise CorruptHeaderError(f"símbolo repetido: {sym}")
        freqs[sym] = freq

    return freqs, pos
