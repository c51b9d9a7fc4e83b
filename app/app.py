from __future__ import annotations

import io
import os
from pathlib import Path
import sys
from typing import Optional

from flask import Flask, request, jsonify, send_file

ROOT = Path(__file__).resolve().parent.parent
# Asegurar que la raíz del repo esté en sys.path al ejecutar `python app/app.py`
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Forzar backend no interactivo para Matplotlib (evita GUI en threads)
os.environ.setdefault("MPLBACKEND", "Agg")

from huffcodec.codec import encode, decode
from huffcodec.errors import CodecError
from huffcodec.report import ReportParams, run_report
from huffcodec.stats import compression_stats


def create_app(config: Optional[dict] = None) -> Flask:
    app = Flask(__name__)

    DEFAULTS = {
        "OUTPUTS": os.environ.get("HUFFCODEC_OUTPUTS", str(ROOT / "outputs_ui")),
        "MAX_UPLOAD_MB": int(os.environ.get("HUFFCODEC_MAX_UPLOAD_MB", "64")),
    }
    app.config.update(DEFAULTS)
    if config:
        app.config.update(config)
    app.config["MAX_CONTENT_LENGTH"] = int(app.config["MAX_UPLOAD_MB"]) * 1024 * 1024

    def _ts_dir(base: Path) -> Path:
        import datetime
        d = base / datetime.datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        d.mkdir(parents=True, exist_ok=True)
        return d

    def _append_log(line: str):
        path = Path(app.config["OUTPUTS"]) / "run_log.txt"
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(line.rstrip() + "\n")

    def _payload():
        """Datos de entrada: campo multipart 'file' o, si no hay, el cuerpo crudo."""
        f = request.files.get("file")
        if f is not None:
            return f.read(), f.filename or "data"
        return request.get_data(), request.args.get("name") or "data"

    @app.errorhandler(CodecError)
    def codec_error(e):
        _append_log(f"[ERROR] {request.path}: {type(e).__name__}: {e}")
        return jsonify({"ok": False, "error": type(e).__name__, "message": str(e)}), 400

    @app.get("/")
    def index():
        return jsonify({
            "service": "huffcodec",
            "endpoints": {
                "/api/encode": "POST archivo o cuerpo -> .huff",
                "/api/decode": "POST .huff -> datos originales",
                "/api/stats": "POST archivo o cuerpo -> métricas JSON (report=1 genera informe)",
            },
            "max_upload_mb": app.config["MAX_UPLOAD_MB"],
        })

    @app.post("/api/encode")
    def api_encode():
        data, name = _payload()
        out = encode(data)
        _append_log(f"encode {name}: {len(data)} B -> {len(out)} B")
        return send_file(io.BytesIO(out), mimetype="application/octet-stream",
                         as_attachment=True, download_name=f"{name}.huff")

    @app.post("/api/decode")
    def api_decode():
        data, name = _payload()
        out = decode(data)
        _append_log(f"decode {name}: {len(data)} B -> {len(out)} B")
        base = name[:-len(".huff")] if name.endswith(".huff") else f"{name}.out"
        return send_file(io.BytesIO(out), mimetype="application/octet-stream",
                         as_attachment=True, download_name=base)

    @app.post("/api/stats")
    def api_stats():
        data, name = _payload()
        st = compression_stats(data)
        resp = {"ok": True, "name": name, "stats": st}
        if request.args.get("report") in {"1", "true", "yes"}:
            out_dir = _ts_dir(Path(app.config["OUTPUTS"]))
            paths = run_report(data, ReportParams(out_dir=str(out_dir)), case=name)
            resp["out"] = str(out_dir)
            resp["files"] = sorted(Path(p).name for p in paths.values())
        _append_log(f"stats {name}: ratio={st['ratio']:.4f}")
        return jsonify(resp)

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
