import argparse
import os
import sys
from typing import Optional

from .codec import compress_file, decompress_file
from .errors import CodecError
from .report import ReportParams, run_report


def percentage(total: int, part: int) -> float:
    return 100.0 * part / total if total else float("nan")


def run_compress(input_path: str, output_path: str, report_dir: Optional[str] = None,
                 title: str = "Compresión Huffman", dpi: int = 140):
    print("Comprimiendo archivo...")
    written = compress_file(input_path, output_path)
    original = os.path.getsize(input_path)
    print(f"{original} B -> {written} B ({percentage(original, written):.2f}% del original)")

    if report_dir:
        with open(input_path, "rb") as f:
            data = f.read()
        run_report(data, ReportParams(out_dir=report_dir, title=title, dpi=dpi),
                   case=os.path.basename(input_path))
        print(f"Informe en: {report_dir}")
    return written


def run_decompress(input_path: str, output_path: str):
    print("Descomprimiendo archivo...")
    written = decompress_file(input_path, output_path)
    print(f"{written} B restaurados en {output_path}")
    return written


def main(argv=None):
    ap = argparse.ArgumentParser(description="Compresor/descompresor Huffman estático (cabecera de frecuencias + EOS)")
    ap.add_argument("mode", choices=["c", "d"], help="c = comprimir, d = descomprimir")
    ap.add_argument("input", help="Archivo de entrada")
    ap.add_argument("output", help="Archivo de salida")
    ap.add_argument("--report", default=None, help="Directorio para métricas, tabla de códigos y figuras (sólo 'c')")
    ap.add_argument("--title", default="Compresión Huffman", help="Título del informe")
    ap.add_argument("--dpi", type=int, default=140, help="Resolución de las figuras")
    args = ap.parse_args(argv)

    try:
        if args.mode == "c":
            run_compress(args.input, args.output, report_dir=args.report, title=args.title, dpi=args.dpi)
        else:
            run_decompress(args.input, args.output)
    except OSError as e:
        print(f"Error de E/S con \"{e.filename or args.input}\": {e.strerror or e}", file=sys.stderr)
        return 1
    except CodecError as e:
        print(f"Archivo de entrada inválido ({type(e).__name__}): {e}", file=sys.stderr)
        return 1

    print("Listo.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
