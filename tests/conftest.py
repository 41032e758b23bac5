import random

import pytest
from py_ecc.optimized_bn128 import b2, field_modulus

from ptau.field import FR, FQ2, G1, G2, ec_mul
from ptau.transcript import Transcript


# ── 테스트 상수 (toxic waste) ──
TOXIC_X = 3721
TOXIC_ALPHA = 3926
DEGREE = 4


def make_powers(generator, x, degree, alpha=1):
    """[αx, αx², ..., αxⁿ]·generator"""
    points = []
    power = FR(x)
    for _ in range(degree):
        points.append(ec_mul(generator, power * alpha))
        power = power * x
    return points


def make_transcript(x=TOXIC_X, alpha=TOXIC_ALPHA, degree=DEGREE,
                    g1_alpha=None, g2_alpha=None, generator_polynomial=None):
    """알려진 비밀 값으로 올바른 transcript를 만든다.

    g1_alpha / g2_alpha로 두 그룹의 α를 따로 지정할 수 있다.
    """
    g1_alpha = alpha if g1_alpha is None else g1_alpha
    g2_alpha = alpha if g2_alpha is None else g2_alpha
    return Transcript(
        make_powers(G1, x, degree),
        make_powers(G1, x, degree, g1_alpha),
        make_powers(G2, x, degree),
        make_powers(G2, x, degree, g2_alpha),
        generator_polynomial,
    )


@pytest.fixture(scope="session")
def transcript():
    """x = 3721, α = 3926, n = 4 의 올바른 transcript."""
    return make_transcript()


@pytest.fixture
def rng():
    return random.Random(1234)


def _fq2_sqrt(a):
    """Fp2 제곱근 (p ≡ 3 mod 4). 제곱근이 없으면 None."""
    p = field_modulus
    a1 = a ** ((p - 3) // 4)
    alpha = a1 * a1 * a
    x0 = a1 * a
    if alpha == FQ2([p - 1, 0]):
        x = FQ2([0, 1]) * x0
    else:
        x = (FQ2.one() + alpha) ** ((p - 1) // 2) * x0
    return x if x * x == a else None


def make_non_subgroup_g2_point():
    """G2 twist 곡선 위에 있지만 위수 r 부분군 밖에 있는 점.

    twist 곡선의 cofactor는 p 정도로 크므로, 곡선 위의 임의의 점은
    거의 확실히 부분군 밖에 있다.
    """
    for k in range(1, 200):
        x = FQ2([k, 1])
        y = _fq2_sqrt(x ** 3 + b2)
        if y is not None:
            return (x, y, FQ2.one())
    raise AssertionError("no twist point found")
