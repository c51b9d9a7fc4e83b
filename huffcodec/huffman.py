from heapq import heappush, heappop
from typing import Dict, Optional

import numpy as np

from .errors import EmptyInputError

ALPHABET_SIZE = 256
EOS = ALPHABET_SIZE  # centinela de fin de flujo, nunca aparece en los datos


class HuffNode:
    def __init__(self, freq, sym=None, left=None, right=None, order=0):
        self.freq = freq
        self.sym = sym
        self.left = left
        self.right = right
        self.order = order

    def is_leaf(self) -> bool:
        return self.sym is not None

    def __lt__(self, other):
        # Empate por orden de inserción: hojas por símbolo y luego nodos internos por antigüedad
        return (self.freq, self.order) < (other.freq, other.order)


def count_frequencies(data: bytes) -> np.ndarray:
    """
    Tabla de frecuencias de 'data' sobre el alfabeto extendido (256 bytes + EOS).
    El centinela queda fijado a 1: la suma total es len(data) + 1.
    """
    arr = np.frombuffer(bytes(data), dtype=np.uint8)
    freqs = np.bincount(arr, minlength=ALPHABET_SIZE + 1).astype(np.int64)
    freqs[EOS] = 1
    return freqs


def build_tree(freqs) -> HuffNode:
    """
    Construye el árbol de Huffman a partir de una tabla de frecuencias.

    Codificador y decodificador llaman a esta misma función con la misma tabla,
    por eso la regla de desempate (freq, orden de inserción) forma parte del formato:
    el primer nodo extraído es siempre el hijo izquierdo.
    """
    heap = []
    order = 0
    for s, f in enumerate(freqs):
        if f > 0:
            heappush(heap, HuffNode(int(f), sym=s, order=order))
            order += 1

    if not heap:
        raise EmptyInputError("la tabla de frecuencias no tiene símbolos activos")

    # Caso degenerado: un único símbolo, se cuelga de un nodo interno para que tenga código '0'
    if len(heap) == 1:
        leaf = heappop(heap)
        return HuffNode(leaf.freq, left=leaf, order=order)

    while len(heap) > 1:
        a = heappop(heap)
        b = heappop(heap)
        heappush(heap, HuffNode(a.freq + b.freq, left=a, right=b, order=order))
        order += 1

    return heappop(heap)


def build_code_table(root: HuffNode) -> Dict[int, str]:
    """Devuelve {simbolo: 'cadena_de_bits'} recorriendo el árbol (izquierda=0, derecha=1)."""
    if root.is_leaf():
        raise ValueError("árbol mal formado: la raíz es una hoja")

    code = {}

    def walk(n: Optional[HuffNode], prefix: str):
        if n is None:
            return
        if n.is_leaf():
            code[n.sym] = prefix
            return
        walk(n.left, prefix + '0')
        walk(n.right, prefix + '1')

    walk(root, '')
    return code


def tree_shape(n: Optional[HuffNode]):
    """Forma del árbol como tuplas anidadas: hoja -> (sym, freq), interno -> (freq, izq, der)."""
    if n is None:
        return None
    if n.is_leaf():
        return (n.sym, n.freq)
    return (n.freq, tree_shape(n.left), tree_shape(n.right))


def average_code_length(code: Dict[int, str], freqs) -> float:
    """Longitud media de código (bits/símbolo) sobre los bytes literales, sin contar EOS."""
    total = sum(int(freqs[s]) for s in code if s != EOS)
    if total == 0:
        return float("nan")
    return sum(len(code[s]) * int(freqs[s]) for s in code if s != EOS) / total
