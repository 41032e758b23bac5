"""
Powers-of-Tau Transcript 검증기
=================================

신뢰 설정(trusted setup) 세리머니가 공개한 SRS 수열이 올바른
거듭제곱 구조를 갖는지, 비밀 값 x(τ)와 α를 모른 채 검증한다.

**검사 항목 (5개, 항상 모두 실행)**:

  ┌──────────────────┬──────────────────────────────────────────┐
  │ g1_x             │ [x, x², ..., xⁿ]·G1,   기준점 g2_x[0]     │
  │ g1_alpha_x       │ [αx, αx², ..., αxⁿ]·G1, 기준점 g2_x[0]    │
  │ g2_x             │ [x, x², ..., xⁿ]·G2,   기준점 g1_x[0]     │
  │ g2_alpha_x       │ [αx, αx², ..., αxⁿ]·G2, 기준점 g1_x[0]    │
  │ alpha_binding    │ e(g1_x[0], g2_alpha_x[0])                 │
  │                  │   == e(g1_alpha_x[0], g2_x[0])            │
  └──────────────────┴──────────────────────────────────────────┘

  앞의 실패가 뒤 검사를 건너뛰게 하지 않는다. 어느 검사가 실패했는지는
  TranscriptReport에 이름별로 남는다.

**병렬 실행**:
  다섯 검사는 서로 독립이다. max_workers > 1 이면 스레드 풀에서 실행한다.
  검사마다 자기 난수 생성기를 쓰므로 공유 상태가 없다.

사용 예시:
    >>> report = check_transcript(g1_x, g1_alpha_x, g2_x, g2_alpha_x)
    >>> report.ok, report.failed
    >>> validate_transcript(g1_x, g1_alpha_x, g2_x, g2_alpha_x)  # bool
"""

import logging
import random
import secrets
import time
from concurrent.futures import ThreadPoolExecutor

from ptau.field import GROUP_G1, GROUP_G2, is_inf
from ptau.accumulator import VerificationKey, same_ratio_preprocess
from ptau.pairing_check import same_ratio


logger = logging.getLogger(__name__)


CHECK_NAMES = ("g1_x", "g1_alpha_x", "g2_x", "g2_alpha_x", "alpha_binding")


class InvalidTranscriptError(ValueError):
    """입력 모양이 잘못된 transcript (길이 불일치, 차수 < 2, 곡선 밖의 점 등)."""


def validate_polynomial_evaluation(evaluation, comparator, polynomial_degree, group, rng=None):
    """evaluation 수열이 comparator가 나타내는 x의 거듭제곱 수열인지 검사한다.

    evaluation의 키는 누적자로 만들고, comparator의 키는
    (lhs = comparator, rhs = 반대 그룹의 생성자)로 만든다.
    rhs = x·lhs 이면 e(lhs, x·Q) == e(rhs, Q) 가 성립한다.

    Args:
        evaluation: 검사할 점 리스트 (group에 속함)
        comparator: 반대 그룹의 기준점 x·Q
        polynomial_degree: 검사할 원소 개수 n (n ≥ 2)
        group: evaluation이 속한 그룹 (GROUP_G1 또는 GROUP_G2)
        rng: 챌린지용 난수 생성기

    Returns:
        bool
    """
    key = same_ratio_preprocess(evaluation, polynomial_degree, group, rng=rng)
    delta = VerificationKey(lhs=comparator, rhs=group.opposite.generator)

    # same_ratio는 (G1 키, G2 키) 순서를 요구한다
    if group.is_g1:
        return same_ratio(key, delta)
    return same_ratio(delta, key)


class TranscriptReport:
    """검사 이름 → 결과(bool)의 순서 있는 묶음."""

    def __init__(self, checks, degree, elapsed=None):
        self.checks = dict(checks)
        self.degree = degree
        self.elapsed = elapsed

    @property
    def ok(self):
        return all(self.checks.values())

    @property
    def failed(self):
        return [name for name, passed in self.checks.items() if not passed]

    def __bool__(self):
        return self.ok

    def to_dict(self):
        return {
            "valid": self.ok,
            "degree": self.degree,
            "checks": dict(self.checks),
            "failed": self.failed,
        }

    def __repr__(self):
        return f"TranscriptReport(ok={self.ok}, failed={self.failed})"


def _check_points(name, points, group, polynomial_degree):
    if len(points) != polynomial_degree:
        raise InvalidTranscriptError(
            f"{name}의 길이 {len(points)}가 차수 {polynomial_degree}와 다릅니다"
        )
    for i, point in enumerate(points):
        if not group.contains(point):
            raise InvalidTranscriptError(f"{name}[{i}]는 {group.name}의 점이 아닙니다")
    # index 0은 다른 수열의 기준점이다. 무한원점이면 모든 페어링이 1이 된다 (x = 0)
    if is_inf(points[0]):
        raise InvalidTranscriptError(f"{name}[0]이 무한원점입니다")


def check_shape(g1_x, g1_alpha_x, g2_x, g2_alpha_x, polynomial_degree=None):
    """네 수열의 모양을 확인하고 차수를 반환한다.

    Raises:
        InvalidTranscriptError: 차수 < 2, 길이 불일치, 잘못된 그룹의 점,
            무한원점인 기준점 (index 0)
    """
    if polynomial_degree is None:
        polynomial_degree = len(g1_x)
    if polynomial_degree < 2:
        raise InvalidTranscriptError(f"다항식 차수는 2 이상이어야 합니다: {polynomial_degree}")

    _check_points("g1_x", g1_x, GROUP_G1, polynomial_degree)
    _check_points("g1_alpha_x", g1_alpha_x, GROUP_G1, polynomial_degree)
    _check_points("g2_x", g2_x, GROUP_G2, polynomial_degree)
    _check_points("g2_alpha_x", g2_alpha_x, GROUP_G2, polynomial_degree)
    return polynomial_degree


def _spawn_rngs(rng, count):
    """검사마다 독립된 난수 생성기를 만든다.

    rng가 주어지면 거기서 고정된 순서로 시드를 뽑아 재현 가능하게 하고,
    없으면 검사마다 secrets.SystemRandom을 쓴다.
    """
    if rng is None:
        return [secrets.SystemRandom() for _ in range(count)]
    return [random.Random(rng.getrandbits(256)) for _ in range(count)]


def _alpha_binding(g1_x, g1_alpha_x, g2_x, g2_alpha_x):
    # g1_x[0] * g2_alpha_x[0] == g1_alpha_x[0] * g2_x[0]
    g1_alpha_key = VerificationKey(lhs=g1_x[0], rhs=g1_alpha_x[0])
    g2_alpha_key = VerificationKey(lhs=g2_alpha_x[0], rhs=g2_x[0])
    return same_ratio(g1_alpha_key, g2_alpha_key)


def check_transcript(g1_x, g1_alpha_x, g2_x, g2_alpha_x, polynomial_degree=None,
                     rng=None, max_workers=None):
    """다섯 검사를 모두 실행하고 TranscriptReport를 반환한다.

    Args:
        g1_x, g1_alpha_x: G1 점 리스트
        g2_x, g2_alpha_x: G2 점 리스트
        polynomial_degree: 수열 길이 n (None이면 len(g1_x))
        rng: 재현 가능한 검사를 위한 난수 생성기 (random.Random 호환)
        max_workers: 1보다 크면 검사를 스레드 풀에서 병렬 실행

    Raises:
        InvalidTranscriptError: 입력 모양이 잘못되었을 때
    """
    n = check_shape(g1_x, g1_alpha_x, g2_x, g2_alpha_x, polynomial_degree)
    rngs = _spawn_rngs(rng, 4)

    tasks = [
        (validate_polynomial_evaluation, (g1_x, g2_x[0], n, GROUP_G1, rngs[0])),
        (validate_polynomial_evaluation, (g1_alpha_x, g2_x[0], n, GROUP_G1, rngs[1])),
        (validate_polynomial_evaluation, (g2_x, g1_x[0], n, GROUP_G2, rngs[2])),
        (validate_polynomial_evaluation, (g2_alpha_x, g1_x[0], n, GROUP_G2, rngs[3])),
        (_alpha_binding, (g1_x, g1_alpha_x, g2_x, g2_alpha_x)),
    ]

    start = time.perf_counter()
    if max_workers is not None and max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(fn, *args) for fn, args in tasks]
            results = [future.result() for future in futures]
    else:
        results = [fn(*args) for fn, args in tasks]
    elapsed = time.perf_counter() - start

    report = TranscriptReport(zip(CHECK_NAMES, results), n, elapsed)
    for name, passed in report.checks.items():
        logger.debug("check %s: %s", name, "ok" if passed else "FAILED")
    if report.ok:
        logger.info("transcript of degree %d verified in %.3fs", n, elapsed)
    else:
        logger.warning("transcript of degree %d failed checks: %s", n, ", ".join(report.failed))
    return report


def validate_transcript(g1_x, g1_alpha_x, g2_x, g2_alpha_x, polynomial_degree=None,
                        rng=None, max_workers=None):
    """check_transcript의 결과를 하나의 bool로 줄인다."""
    return check_transcript(
        g1_x, g1_alpha_x, g2_x, g2_alpha_x, polynomial_degree,
        rng=rng, max_workers=max_workers,
    ).ok
