"""
Same-Ratio 누적자 (Group Accumulator)
=======================================

점 수열 [x·P, x²·P, ..., xⁿ·P] 가 하나의 비밀 x의 거듭제곱임을
한 번의 페어링 검사로 확인할 수 있도록 두 개의 점으로 압축한다.

**구성**:
  랜덤 챌린지 z를 뽑고 가중치를 제곱으로 갱신한다.

    w₀ = z,  w_k = w_{k-1}²       (z, z², z⁴, z⁸, ...)

  인접한 두 점에 같은 가중치를 곱해 양쪽에 더한다.

    lhs = w₀·P₀ + w₁·P₁ + ... + w_{n-2}·P_{n-2}
    rhs = w₀·P₁ + w₁·P₂ + ... + w_{n-2}·P_{n-1}

  수열이 올바르면 P_{k+1} = x·P_k 이므로 rhs = x·lhs 이다.

**왜 랜덤 가중치인가?**
  각 항에 서로 독립적인 가중치가 곱해지므로, 한 원소만 위조해도
  rhs = x·lhs 관계는 (Schwartz–Zippel 보조정리에 의해) 거의 확실히 깨진다.
  가중치는 매 호출마다 새로 뽑으므로 위조자가 미리 맞출 수 없다.

사용 예시:
    >>> key = same_ratio_preprocess(g1_points, len(g1_points), GROUP_G1)
    >>> key.lhs, key.rhs
"""

import secrets

from ptau.field import FR, CURVE_ORDER, ec_mul, ec_add


class VerificationKey:
    """같은 그룹의 두 점 (lhs, rhs).

    두 점이 모두 설정되기 전에는 same_ratio에 넘길 수 없다.
    """

    def __init__(self, lhs=None, rhs=None):
        self.lhs = lhs
        self.rhs = rhs

    @property
    def complete(self):
        return self.lhs is not None and self.rhs is not None

    def __repr__(self):
        return f"VerificationKey(lhs={self.lhs!r}, rhs={self.rhs!r})"


def random_challenge(rng=None):
    """[1, r) 범위의 균일한 FR 챌린지를 뽑는다.

    Args:
        rng: randrange를 제공하는 난수 생성기 (random.Random 호환).
             None이면 OS 엔트로피를 쓰는 secrets.SystemRandom.
    """
    if rng is None:
        rng = secrets.SystemRandom()
    return FR(rng.randrange(1, CURVE_ORDER))


def same_ratio_preprocess(points, polynomial_degree, group, rng=None):
    """수열을 VerificationKey (lhs, rhs)로 압축한다.

    Args:
        points: 같은 그룹의 점 리스트 (길이 ≥ polynomial_degree)
        polynomial_degree: 사용할 원소 개수 n (n ≥ 2)
        group: points가 속한 그룹 (GROUP_G1 또는 GROUP_G2)
        rng: 챌린지용 난수 생성기

    Returns:
        VerificationKey: rhs = x·lhs 이면 수열이 올바르다

    Raises:
        ValueError: n < 2 이거나 점이 부족할 때
    """
    if polynomial_degree < 2:
        raise ValueError(f"다항식 차수는 2 이상이어야 합니다: {polynomial_degree}")
    if len(points) < polynomial_degree:
        raise ValueError(
            f"점 {len(points)}개로는 차수 {polynomial_degree}를 검사할 수 없습니다"
        )

    challenge = random_challenge(rng)
    scalar_multiplier = challenge

    lhs = group.zero
    rhs = group.zero
    for i in range(polynomial_degree - 1):
        if i > 0:
            scalar_multiplier = scalar_multiplier * scalar_multiplier
        lhs = ec_add(lhs, ec_mul(points[i], scalar_multiplier))
        rhs = ec_add(rhs, ec_mul(points[i + 1], scalar_multiplier))

    return VerificationKey(lhs=lhs, rhs=rhs)
