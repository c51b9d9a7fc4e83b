"""Codificación y decodificación Huffman estática en dos pasadas.

encode:  frecuencias -> árbol -> tabla de códigos -> cabecera -> bits + EOS + relleno
decode:  cabecera -> mismo árbol -> recorrido bit a bit hasta EOS
"""

import io
from typing import BinaryIO

import numpy as np

from .bits_utils import BitReader, BitWriter, CHUNK_SIZE
from .errors import CorruptHeaderError, InvalidCodeError
from .header import read_header, write_header
from .huffman import ALPHABET_SIZE, EOS, build_code_table, build_tree, count_frequencies


def _emit_payload(chunks, code, writer: BitWriter):
    for chunk in chunks:
        for b in chunk:
            writer.emit_code(code[b])
    writer.emit_code(code[EOS])
    writer.flush_pad()


def encode(data: bytes) -> bytes:
    """Comprime 'data' y devuelve cabecera + bits empaquetados."""
    data = bytes(data)
    freqs = count_frequencies(data)
    code = build_code_table(build_tree(freqs))

    writer = BitWriter()
    _emit_payload([data], code, writer)
    return write_header(freqs) + writer.getvalue()


def _read_chunks(src: BinaryIO):
    while True:
        chunk = src.read(CHUNK_SIZE)
        if not chunk:
            return
        yield chunk


def encode_stream(src: BinaryIO, dst: BinaryIO) -> int:
    """
    Versión para flujos binarios. La segunda pasada necesita releer la entrada:
    si 'src' no admite seek se guarda entera en memoria antes de contar.
    Devuelve el número de bytes escritos en 'dst'.
    """
    if not src.seekable():
        src = io.BytesIO(src.read())

    start = src.tell()
    counts = np.zeros(ALPHABET_SIZE + 1, dtype=np.int64)
    for chunk in _read_chunks(src):
        counts[:ALPHABET_SIZE] += np.bincount(np.frombuffer(chunk, dtype=np.uint8), minlength=ALPHABET_SIZE)
    counts[EOS] = 1

    code = build_code_table(build_tree(counts))
    header = write_header(counts)
    dst.write(header)

    src.seek(start)
    sink = _CountingSink(dst)
    _emit_payload(_read_chunks(src), code, BitWriter(sink))
    return len(header) + sink.written


class _CountingSink:
    def __init__(self, dst):
        self.dst = dst
        self.written = 0

    def write(self, b: bytes):
        self.written += len(b)
        self.dst.write(b)


def decode(data: bytes) -> bytes:
    """Descomprime la salida de encode. Falla con un CodecError si la entrada está dañada."""
    data = bytes(data)
    freqs, offset = read_header(data)
    if freqs[EOS] == 0:
        raise CorruptHeaderError("la cabecera no incluye el centinela EOS")
    root = build_tree(freqs)

    reader = BitReader(data, offset)
    out = bytearray()
    while True:
        n = root
        while not n.is_leaf():
            n = n.right if reader.read_bit() else n.left
            if n is None:
                raise InvalidCodeError(f"código inválido cerca del byte {reader.pos}")
        if n.sym == EOS:
            break
        out.append(n.sym)
    return bytes(out)


def decode_stream(src: BinaryIO, dst: BinaryIO) -> int:
    """Descomprime 'src' en 'dst'. No escribe nada si la decodificación falla."""
    out = decode(src.read())
    dst.write(out)
    return len(out)


def compress_file(input_path: str, output_path: str) -> int:
    with open(input_path, "rb") as fin, open(output_path, "wb") as fout:
        return encode_stream(fin, fout)


def decompress_file(input_path: str, output_path: str) -> int:
    with open(input_path, "rb") as fin:
        out = decode(fin.read())
    with open(output_path, "wb") as fout:
        fout.write(out)
    return len(out)
