"""
Powers-of-Tau Flask Blueprint — transcript 저장, 검증, range 준비
==================================================================

JSON 엔드포인트 6개 (GET 2 + PUT 1 + POST 2 + DELETE 1)
"""

from flask import Blueprint, current_app, jsonify, request
from tinydb import Query

from ptau.transcript import prepare_range

from ptau_serializers import (
    serialize_transcript, deserialize_transcript,
    serialize_prepared, deserialize_prepared,
    serialize_report,
)

ptau_bp = Blueprint('ptau', __name__, url_prefix='/ptau')

DATA = Query()

# DB는 app.py에서 주입
DB = None


def init_ptau_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def db_remove(key):
    """DB에서 키를 삭제한다."""
    DB.remove(DATA.type == key)


def transcript_key(name):
    return f"ptau.transcript.{name}"


def prepared_key(name):
    return f"ptau.prepared.{name}"


def report_key(name):
    return f"ptau.report.{name}"


def load_transcript(name):
    data = db_get(transcript_key(name))
    if data is None:
        return None
    return deserialize_transcript(data)


def not_found(name):
    return jsonify({"error": f"transcript '{name}' not found"}), 404


@ptau_bp.errorhandler(ValueError)
def bad_request(err):
    # InvalidTranscriptError 포함
    return jsonify({"error": str(err)}), 400


# ──────────────────────────────────────────────────────────────
# Transcript
# ──────────────────────────────────────────────────────────────

@ptau_bp.route("/transcripts/<name>", methods=["PUT"])
def transcript_put(name):
    """transcript를 저장한다. 모양이 잘못되면 400."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValueError("JSON object body required")

    transcript = deserialize_transcript(body)
    degree = transcript.check_shape()

    db_set(transcript_key(name), serialize_transcript(transcript))
    db_remove(prepared_key(name))
    db_remove(report_key(name))
    current_app.logger.info("stored transcript %s (degree %d)", name, degree)

    return jsonify({"name": name, "degree": degree}), 201


@ptau_bp.route("/transcripts/<name>", methods=["GET"])
def transcript_get(name):
    """저장된 transcript 요약."""
    transcript = load_transcript(name)
    if transcript is None:
        return not_found(name)

    generator = transcript.generator_polynomial
    return jsonify({
        "name": name,
        "degree": transcript.degree,
        "generator_length": None if generator is None else len(generator),
        "prepared": db_get(prepared_key(name)) is not None,
        "report": db_get(report_key(name)),
    })


@ptau_bp.route("/transcripts/<name>", methods=["DELETE"])
def transcript_delete(name):
    if db_get(transcript_key(name)) is None:
        return not_found(name)
    db_remove(transcript_key(name))
    db_remove(prepared_key(name))
    db_remove(report_key(name))
    return "", 204


# ──────────────────────────────────────────────────────────────
# 검증
# ──────────────────────────────────────────────────────────────

@ptau_bp.route("/transcripts/<name>/verify", methods=["POST"])
def transcript_verify(name):
    """다섯 검사를 실행하고 결과를 저장한다.

    구조 불일치는 200 + valid: false 로 돌려준다.
    """
    transcript = load_transcript(name)
    if transcript is None:
        return not_found(name)

    report = transcript.verify(max_workers=current_app.config["PTAU_VERIFY_WORKERS"])
    data = serialize_report(report)
    db_set(report_key(name), data)

    if not report.ok:
        current_app.logger.warning("transcript %s failed: %s", name, ", ".join(report.failed))
    return jsonify(data)


# ──────────────────────────────────────────────────────────────
# Range 준비
# ──────────────────────────────────────────────────────────────

@ptau_bp.route("/transcripts/<name>/prepare", methods=["POST"])
def transcript_prepare(name):
    """g1_x 앞에 G1 생성자를 붙인 range를 만들어 저장한다."""
    transcript = load_transcript(name)
    if transcript is None:
        return not_found(name)

    prepared = prepare_range(transcript)
    db_set(prepared_key(name), serialize_prepared(prepared))

    generator = prepared.generator_polynomial
    return jsonify({
        "name": name,
        "g1_x_length": len(prepared.g1_x),
        "generator_length": None if generator is None else len(generator),
    })


@ptau_bp.route("/transcripts/<name>/prepared", methods=["GET"])
def transcript_prepared(name):
    """저장된 range를 다시 검사해서 돌려준다."""
    data = db_get(prepared_key(name))
    if data is None:
        return not_found(name)
    return jsonify(serialize_prepared(deserialize_prepared(data)))
