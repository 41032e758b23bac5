"""
Powers-of-Tau 데이터 직렬화/역직렬화 헬퍼
===========================================

TinyDB와 JSON 요청/응답에 담을 수 있는 형태로 변환한다.
FR, G1, G2, Transcript, PreparedRange, TranscriptReport.

점은 아핀 좌표의 10진 문자열로 저장하고, 무한원점은 None(null)이다.
역직렬화할 때 곡선 위의 점인지 확인한다.
"""

from ptau.field import FR, GROUP_G1, GROUP_G2, normalize, from_affine
from ptau.field import FQ1, FQ2
from ptau.transcript import Transcript, PreparedRange


# ─── FR ───

def serialize_fr(val):
    """FR → str(int)"""
    return str(int(val))


def deserialize_fr(s):
    """str(int) → FR"""
    return FR(int(s))


def serialize_fr_list(lst):
    return [serialize_fr(v) for v in lst]


def deserialize_fr_list(data):
    return [deserialize_fr(s) for s in data]


def _coordinate(value, label):
    """str 또는 int 좌표 → int"""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError(f"{label}의 좌표는 10진 문자열이어야 합니다: {value!r}")
    return int(value)


def _point_list(data, label):
    if not isinstance(data, list):
        raise ValueError(f"{label}은(는) 점의 리스트여야 합니다: {data!r}")
    return data


# ─── G1 point ───

def serialize_g1(point):
    """G1 point → [str, str] or None"""
    affine = normalize(point)
    if affine is None:
        return None
    return [str(int(affine[0])), str(int(affine[1]))]


def deserialize_g1(data, label="G1"):
    """[str, str] or None → G1 point

    Raises:
        ValueError: 형식이 틀리거나 G1의 점이 아닐 때
    """
    if data is None:
        return GROUP_G1.zero
    if not isinstance(data, list) or len(data) != 2:
        raise ValueError(f"{label} 점은 좌표 2개의 리스트여야 합니다: {data!r}")
    point = from_affine(FQ1(_coordinate(data[0], label)), FQ1(_coordinate(data[1], label)))
    if not GROUP_G1.contains(point):
        raise ValueError(f"{label}: G1 곡선 위의 점이 아닙니다: {data!r}")
    return point


# ─── G2 point ───

def serialize_g2(point):
    """G2 point → [[str,str],[str,str]] or None"""
    affine = normalize(point)
    if affine is None:
        return None
    return [
        [str(int(affine[0].coeffs[0])), str(int(affine[0].coeffs[1]))],
        [str(int(affine[1].coeffs[0])), str(int(affine[1].coeffs[1]))]
    ]


def deserialize_g2(data, label="G2"):
    """[[str,str],[str,str]] or None → G2 point

    Raises:
        ValueError: 형식이 틀리거나 G2 (위수 r 부분군)의 점이 아닐 때
    """
    if data is None:
        return GROUP_G2.zero
    if (not isinstance(data, list) or len(data) != 2
            or any(not isinstance(c, list) or len(c) != 2 for c in data)):
        raise ValueError(f"{label} 점은 [[x0, x1], [y0, y1]] 형식이어야 합니다: {data!r}")
    point = from_affine(
        FQ2([_coordinate(data[0][0], label), _coordinate(data[0][1], label)]),
        FQ2([_coordinate(data[1][0], label), _coordinate(data[1][1], label)]),
    )
    if not GROUP_G2.contains(point):
        raise ValueError(f"{label}: G2 부분군의 점이 아닙니다: {data!r}")
    return point


# ─── Transcript ───

def serialize_transcript(transcript):
    """Transcript → dict"""
    generator = transcript.generator_polynomial
    return {
        "g1_x": [serialize_g1(p) for p in transcript.g1_x],
        "g1_alpha_x": [serialize_g1(p) for p in transcript.g1_alpha_x],
        "g2_x": [serialize_g2(p) for p in transcript.g2_x],
        "g2_alpha_x": [serialize_g2(p) for p in transcript.g2_alpha_x],
        "generator_polynomial": None if generator is None else serialize_fr_list(generator),
    }


def _deserialize_points(data, field, deserialize):
    return [
        deserialize(p, f"{field}[{i}]")
        for i, p in enumerate(_point_list(data[field], field))
    ]


def _deserialize_generator(data):
    generator = data.get("generator_polynomial")
    if generator is None:
        return None
    if not isinstance(generator, list):
        raise ValueError(f"generator_polynomial은 리스트여야 합니다: {generator!r}")
    return [deserialize_fr(_coordinate(c, "generator_polynomial")) for c in generator]


def deserialize_transcript(data):
    """dict → Transcript

    Raises:
        ValueError: 필드가 빠졌거나 형식이 틀렸거나 점이 잘못되었을 때
    """
    if not isinstance(data, dict):
        raise ValueError("transcript는 JSON object여야 합니다")
    missing = [k for k in ("g1_x", "g1_alpha_x", "g2_x", "g2_alpha_x") if k not in data]
    if missing:
        raise ValueError(f"transcript에 필드가 없습니다: {', '.join(missing)}")

    return Transcript(
        _deserialize_points(data, "g1_x", deserialize_g1),
        _deserialize_points(data, "g1_alpha_x", deserialize_g1),
        _deserialize_points(data, "g2_x", deserialize_g2),
        _deserialize_points(data, "g2_alpha_x", deserialize_g2),
        _deserialize_generator(data),
    )


# ─── PreparedRange ───

def serialize_prepared(prepared):
    """PreparedRange → dict"""
    generator = prepared.generator_polynomial
    return {
        "g1_x": [serialize_g1(p) for p in prepared.g1_x],
        "generator_polynomial": None if generator is None else serialize_fr_list(generator),
    }


def deserialize_prepared(data):
    """dict → PreparedRange (g1_x의 점을 다시 검사한다)"""
    return PreparedRange(
        _deserialize_points(data, "g1_x", deserialize_g1),
        _deserialize_generator(data),
    )


# ─── TranscriptReport ───

def serialize_report(report):
    """TranscriptReport → dict (elapsed는 초 단위 float)"""
    data = report.to_dict()
    data["elapsed"] = report.elapsed
    return data
