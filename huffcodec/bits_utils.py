import numpy as np
import math
from typing import List, Tuple

from .errors import EndOfStreamError

CHUNK_SIZE = 64 * 1024


class BitWriter:
    """
    Empaqueta bits MSB-first en bytes.
    El acumulador es del propio objeto: una instancia por llamada a encode.
    """

    def __init__(self, sink=None):
        self.sink = sink
        self.out = bytearray()
        self.buffer = 0
        self.n_bits = 0

    def emit_bit(self, bit: int):
        self.buffer = (self.buffer << 1) | (bit & 1)
        self.n_bits += 1
        if self.n_bits == 8:
            self.out.append(self.buffer)
            self.buffer = 0
            self.n_bits = 0
            if self.sink is not None and len(self.out) >= CHUNK_SIZE:
                self._drain()

    def emit_code(self, code: str):
        for c in code:
            if c == '0':
                self.emit_bit(0)
            elif c == '1':
                self.emit_bit(1)
            else:
                raise ValueError(f"bit inválido en el código: {c!r}")

    def flush_pad(self):
        # Completa con ceros el último byte (si hay bits pendientes)
        if self.n_bits > 0:
            self.out.append(self.buffer << (8 - self.n_bits))
            self.buffer = 0
            self.n_bits = 0
        if self.sink is not None:
            self._drain()

    def _drain(self):
        self.sink.write(bytes(self.out))
        self.out.clear()

    def getvalue(self) -> bytes:
        return bytes(self.out)


class BitReader:
    """Extrae bits MSB-first de 'data' a partir de 'offset'."""

    def __init__(self, data: bytes, offset: int = 0):
        self.data = data
        self.pos = offset
        self.buffer = 0
        self.n_bits = 0

    def read_bit(self) -> int:
        if self.n_bits == 0:
            if self.pos >= len(self.data):
                raise EndOfStreamError("flujo de bits agotado antes del centinela EOS")
            self.buffer = self.data[self.pos]
            self.pos += 1
            self.n_bits = 8
        self.n_bits -= 1
        return (self.buffer >> self.n_bits) & 1


def bytes_to_bits(data: bytes) -> np.ndarray:
    return np.unpackbits(np.frombuffer(bytes(data), dtype=np.uint8))


def bits_entropy_stats(bits: List[int]) -> Tuple[float, float, float, float]:
    """
    Calcula métricas del flujo de bits:
    - p0: probabilidad de 0
    - p1: probabilidad de 1
    - H: entropía (bits/bit)
    - var: varianza sobre {0,1}
    """
    arr = np.array(bits, dtype=np.uint8)
    if arr.size == 0:
        return float("nan"), float("nan"), 0.0, 0.0
    p1 = float(arr.mean())
    p0 = 1 - p1

    def hb(p):
        if p <= 0 or p >= 1:
            return 0.0
        return -p * math.log2(p) - (1 - p) * math.log2(1 - p)

    H = hb(p1)
    var = float(arr.var())
    return p0, p1, H, var
