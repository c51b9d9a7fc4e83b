from __future__ import annotations
import os
import json
from dataclasses import dataclass, asdict
from typing import Dict

import pandas as pd

from .bits_utils import bytes_to_bits
from .codec import encode
from .header import read_header
from .huffman import EOS, build_code_table, build_tree
from .plot_utils import save_symbol_hist, save_code_lengths, plot_hist_bits
from .stats import compression_stats

METRIC_COLUMNS = [
    "Caso",
    "Tamaño original [B]",
    "Tamaño comprimido [B]",
    "Cabecera [B]",
    "Ratio",
    "Ahorro [%]",
    "Entropía [bits/símbolo]",
    "Longitud media (Huffman)",
    "Eficiencia",
    "P(0)",
    "P(1)",
]


@dataclass
class ReportParams:
    out_dir: str = "outputs"
    title: str = "Compresión Huffman"
    dpi: int = 140


def _ensure_dir(path: str) -> str:
    os.makedirs(path, exist_ok=True)
    return path


def _save_json(obj: dict, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)


def metrics_row(case: str, st: Dict[str, float]):
    return (
        case,
        st["original_size"],
        st["compressed_size"],
        st["header_size"],
        st["ratio"],
        st["saving_pct"],
        st["entropy"],
        st["avg_code_length"],
        st["efficiency"],
        st["p0"],
        st["p1"],
    )


def save_metrics_csv(out_dir: str, rows):
    df = pd.DataFrame(rows, columns=METRIC_COLUMNS)
    df.to_csv(os.path.join(out_dir, "resumen_metricas.csv"), index=False)
    return df


def save_code_table_csv(out_dir: str, code: Dict[int, str], freqs):
    rows = []
    for s in sorted(code):
        rows.append(("EOS" if s == EOS else s, int(freqs[s]), code[s], len(code[s])))
    df = pd.DataFrame(rows, columns=["Símbolo", "Frecuencia", "Código", "Longitud"])
    df.to_csv(os.path.join(out_dir, "tabla_codigos.csv"), index=False)
    return df


def write_markdown(out_dir: str, title: str = "Compresión Huffman"):
    md = f"""# {title}

## 1) Frecuencias de la fuente
![symbol_hist](figures/symbol_hist.png)

## 2) Longitudes de código
![code_lengths](figures/code_lengths.png)
Tabla completa en **tabla_codigos.csv**.

## 3) Bits empaquetados
![bits_hist](figures/bits_hist.png)

## 4) Métricas
Ver **resumen_metricas.csv**.

**Notas**
- Huffman estático en dos pasadas: la cabecera guarda las frecuencias, no el árbol.
- La eficiencia es entropía / longitud media; el máximo es 1.
"""
    with open(os.path.join(out_dir, "informe.md"), "w", encoding="utf-8") as f:
        f.write(md)


def run_report(data: bytes, params: ReportParams, case: str = "entrada") -> Dict[str, str]:
    """Genera métricas, tabla de códigos, figuras e informe para 'data' en params.out_dir."""
    out_dir = _ensure_dir(params.out_dir)
    figdir = _ensure_dir(os.path.join(out_dir, "figures"))

    # La tabla se reconstruye desde la cabecera, igual que hará el decodificador
    compressed = encode(data)
    freqs, offset = read_header(compressed)
    code = build_code_table(build_tree(freqs))
    st = compression_stats(data, compressed=compressed, code=code)

    paths = {
        "symbol_hist": os.path.join(figdir, "symbol_hist.png"),
        "code_lengths": os.path.join(figdir, "code_lengths.png"),
        "bits_hist": os.path.join(figdir, "bits_hist.png"),
    }
    save_symbol_hist(freqs, f"{case}: frecuencia por byte", paths["symbol_hist"], dpi=params.dpi)
    save_code_lengths(code, f"{case}: longitudes de código", paths["code_lengths"], dpi=params.dpi)
    plot_hist_bits(bytes_to_bits(compressed[offset:]), f"{case}: histograma de bits (Huffman)",
                   paths["bits_hist"], dpi=params.dpi)

    save_metrics_csv(out_dir, [metrics_row(case, st)])
    save_code_table_csv(out_dir, code, freqs)
    write_markdown(out_dir, params.title)
    _save_json(asdict(params), os.path.join(out_dir, "params.json"))

    paths["metrics"] = os.path.join(out_dir, "resumen_metricas.csv")
    paths["code_table"] = os.path.join(out_dir, "tabla_codigos.csv")
    paths["markdown"] = os.path.join(out_dir, "informe.md")
    paths["params"] = os.path.join(out_dir, "params.json")
    return paths
