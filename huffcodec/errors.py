"""Errores del códec Huffman.

Todos heredan de ValueError: son fallos de los datos de entrada, no del
programa, y se propagan sin recuperarse hasta la CLI o la API HTTP.
"""


class CodecError(ValueError):
    """Base de todos los errores del códec."""


class EmptyInputError(CodecError):
    """No hay ningún símbolo con frecuencia > 0 para construir el árbol."""


class CorruptHeaderError(CodecError):
    """Cabecera mal formada, incompleta o inconsistente."""


class EndOfStreamError(CodecError):
    """El flujo de bits se agotó antes de llegar al centinela EOS."""


class InvalidCodeError(CodecError):
    """La secuencia de bits no corresponde a ningún camino del árbol."""
