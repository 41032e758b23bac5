"""
Powers-of-Tau 기반 모듈: 스칼라 필드, 타원곡선 그룹, 페어링
=============================================================

검증기 전체에서 사용하는 대수적 도구를 한 곳에 모은다.

**스칼라 필드 FR**:
  alt_bn128 곡선의 스칼라 필드. 누적자(accumulator)의 랜덤 챌린지에만 사용된다.

**그룹 G1, G2**:
  위수 r이 같은 두 덧셈군. 페어링 e: G1 × G2 → GT 로 연결된다.
  py_ecc의 optimized_bn128 (사영 좌표)을 사용하므로 점은 (x, y, z) 3-튜플이고,
  무한원점은 z = 0 이다. 점 비교는 반드시 ec_eq로 한다.

**그룹 역할 (Group)**:
  페어링은 비대칭이다: 첫 번째 인자는 항상 G1, 두 번째는 G2.
  호출자는 수열이 어느 그룹에 속하는지 GROUP_G1 / GROUP_G2 로 명시하고,
  인자 순서는 이 역할로부터 결정된다.

사용 예시:
    >>> from ptau.field import FR, G1, GROUP_G2, ec_mul
    >>> P = ec_mul(G1, FR(5))       # 5·G1
    >>> GROUP_G2.opposite.name      # 'G1'
"""

from py_ecc import optimized_bn128 as bn128
from py_ecc.optimized_bn128 import optimized_pairing
from py_ecc.fields import bn128_FQ as FQ
from py_ecc.fields import optimized_bn128_FQ as FQ1
from py_ecc.fields import optimized_bn128_FQ2 as FQ2
from py_ecc.fields import optimized_bn128_FQ12 as FQ12


# ─────────────────────────────────────────────────────────────────────
# 스칼라 필드 FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """alt_bn128 스칼라 필드 위의 원소 (mod r)."""
    field_modulus = bn128.curve_order


CURVE_ORDER = bn128.curve_order


# ─────────────────────────────────────────────────────────────────────
# 타원곡선 상수 및 연산
# ─────────────────────────────────────────────────────────────────────

G1 = bn128.G1
G2 = bn128.G2

# 무한원점 (항등원)
Z1 = bn128.Z1
Z2 = bn128.Z2

# GT의 항등원
GT_ONE = FQ12.one()


def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point.

    Args:
        point: G1 또는 G2 위의 점
        scalar: 정수 또는 FR 원소
    """
    if isinstance(scalar, FR):
        scalar = int(scalar)
    return bn128.multiply(point, scalar % CURVE_ORDER)


def ec_add(p1, p2):
    """같은 그룹의 두 점을 더한다."""
    return bn128.add(p1, p2)


def ec_neg(point):
    return bn128.neg(point)


def ec_eq(p1, p2):
    """사영 좌표의 두 점이 같은 점인지 비교한다.

    (x, y, z)와 (λx, λy, λz)는 같은 점이므로 튜플 비교(==)는 쓸 수 없다.
    """
    return bn128.eq(p1, p2)


def is_inf(point):
    return bn128.is_inf(point)


def normalize(point):
    """사영 좌표 → 아핀 좌표 (x, y). 무한원점은 None."""
    if bn128.is_inf(point):
        return None
    return bn128.normalize(point)


def from_affine(x, y):
    """아핀 좌표 (x, y) → 사영 좌표 (x, y, 1).

    x, y의 타입(FQ 또는 FQ2)에 따라 G1 또는 G2 점이 된다.
    """
    return (x, y, x.one())


def in_subgroup(point):
    """r·point == O 인지 확인한다.

    ec_mul은 스칼라를 r로 나눈 나머지를 쓰므로 bn128.multiply를 직접 부른다.
    """
    return bn128.is_inf(bn128.multiply(point, CURVE_ORDER))


# ─────────────────────────────────────────────────────────────────────
# 페어링
# ─────────────────────────────────────────────────────────────────────

def miller_loop(g1_point, g2_point):
    """최종 지수승(final exponentiation) 전의 Miller loop 결과.

    주의:
        py_ecc의 pairing 인자 순서는 (G2, G1)이다.
        여기서는 (G1, G2) 순서로 받는다.
    """
    return optimized_pairing.pairing(g2_point, g1_point, final_exponentiate=False)


def final_exponentiate(value):
    return optimized_pairing.final_exponentiate(value)


# ─────────────────────────────────────────────────────────────────────
# 그룹 역할 (G1 / G2)
# ─────────────────────────────────────────────────────────────────────

class Group:
    """수열이 속한 그룹의 역할.

    속성:
        name: 'G1' 또는 'G2'
        generator: 그룹 생성자
        zero: 무한원점
        coordinate_type: 좌표 필드 타입 (G1: FQ, G2: FQ2)
        curve_b: 곡선 방정식 y² = x³ + b 의 b
        is_g1: 페어링의 첫 번째 인자 자리인지 여부
        has_cofactor: 곡선 위의 점 전체가 위수 r 부분군보다 큰지 여부
            (bn128 G1은 cofactor 1, G2 twist 곡선은 cofactor > 1)
    """

    def __init__(self, name, generator, zero, coordinate_type, curve_b, is_g1,
                 has_cofactor=False):
        self.name = name
        self.generator = generator
        self.zero = zero
        self.coordinate_type = coordinate_type
        self.curve_b = curve_b
        self.is_g1 = is_g1
        self.has_cofactor = has_cofactor
        self.opposite = None

    def contains(self, point):
        """point가 이 그룹 (곡선 위의 위수 r 부분군)의 점인지 확인한다."""
        if not isinstance(point, tuple) or len(point) != 3:
            return False
        if not all(isinstance(c, self.coordinate_type) for c in point):
            return False
        if not bn128.is_on_curve(point, self.curve_b):
            return False
        if self.has_cofactor:
            return in_subgroup(point)
        return True

    def __repr__(self):
        return f"Group({self.name})"


GROUP_G1 = Group("G1", G1, Z1, FQ1, bn128.b, is_g1=True)
GROUP_G2 = Group("G2", G2, Z2, FQ2, bn128.b2, is_g1=False, has_cofactor=True)
GROUP_G1.opposite = GROUP_G2
GROUP_G2.opposite = GROUP_G1
