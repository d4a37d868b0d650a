from flask import Flask, request, jsonify
from flask import Response
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.utils import secure_filename
from urllib.parse import quote
import datetime as dt
import logging
import math

from .config import HOST, PORT, MAX_UPLOAD_MB, configure_logging
from .detectors.ensemble import compute_risk, classify
from .features.lexicon import LEXICON
from .services.advice import get_advice, list_advices
from .services.export import build_json, build_pdf
from .utils.email_parser import parse_email_bytes

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = MAX_UPLOAD_MB * 1024 * 1024

EMAIL_FIELDS = ("subject", "body", "sender")


def _read_email():
    """Pull (subject, body, sender) out of the JSON body or return an error response."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None, (jsonify({"error": "invalid_json", "message": "expected a JSON object"}), 400)
    email = {}
    for field in EMAIL_FIELDS:
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            return None, (jsonify({"error": "invalid_field", "message": f"{field} must be a string"}), 400)
        email[field] = value or ""
    return email, None


def _report(email):
    risk = compute_risk(email["subject"], email["body"], email["sender"])
    report = {"subject": email["subject"], "sender": email["sender"]}
    report.update(risk)
    return report


@app.errorhandler(RequestEntityTooLarge)
def too_large(e):
    logger.warning("rejected request over %s MB", MAX_UPLOAD_MB)
    return jsonify({"error": "too_large", "message": f"limit is {MAX_UPLOAD_MB} MB"}), 413


@app.route("/api/v1/analyze", methods=["POST"])
def analyze_email():
    email, err = _read_email()
    if err:
        return err
    return jsonify(_report(email))


@app.route("/api/v1/classify", methods=["POST"])
def classify_score():
    data = request.get_json(silent=True)
    score = data.get("score") if isinstance(data, dict) else None
    if isinstance(score, bool) or not isinstance(score, (int, float)) or not math.isfinite(score):
        return jsonify({"error": "invalid_score", "message": "score must be a finite number"}), 400
    return jsonify({"score": score, "level": classify(score)})


@app.route("/api/emails/upload", methods=["POST"])
def upload_emails():
    files = request.files.getlist("files")
    if not files:
        return jsonify({"error": "no_files"}), 400

    items = []
    for f in files:
        filename = secure_filename(f.filename or "")
        if not filename:
            logger.warning("skipping upload without a usable filename")
            continue
        item = {"filename": filename}
        try:
            item.update(_report(parse_email_bytes(f.read(), filename)))
        except Exception as e:
            logger.exception("analysis failed for %s", filename)
            item.update({"error": "analysis_failed", "message": str(e)})
        items.append(item)
    if not items:
        return jsonify({"error": "no_files"}), 400
    return jsonify({"items": items})


@app.route("/api/v1/report/export", methods=["POST"])
def export_report():
    fmt = request.args.get("format", "pdf").lower()
    if fmt not in ("pdf", "json"):
        return jsonify({"error": "invalid_format", "message": "format must be pdf or json"}), 400
    email, err = _read_email()
    if err:
        return err

    report = _report(email)
    date_str = dt.datetime.now().strftime("%Y%m%d")
    filename = quote(f"report_{date_str}_{report['level']}.{fmt}")
    headers = {
        "Content-Disposition": f"attachment; filename*=UTF-8''{filename}",
        "Cache-Control": "no-store",
    }
    if fmt == "json":
        return Response(build_json(report), headers=headers, mimetype="application/json")
    try:
        data = build_pdf(report)
    except Exception as e:
        logger.exception("pdf export failed")
        return jsonify({"error": "export_error", "message": str(e)}), 500
    return Response(data, headers=headers, mimetype="application/pdf")


@app.route("/api/advice", methods=["GET"])
def advice():
    level = request.args.get("level")
    if not level:
        return jsonify({"items": list_advices()})
    return jsonify({"level": level, "recommendation": get_advice(level.upper())})


@app.route("/api/engine/status", methods=["GET"])
def engine_status():
    return jsonify({"online": True, "weights": dict(LEXICON.weights)})


def create_app():
    configure_logging()
    return app


if __name__ == "__main__":
    create_app().run(host=HOST, port=PORT)
