"""
Same-Ratio 페어링 검사
========================

두 VerificationKey (G1 쪽, G2 쪽)의 비율이 같은지 확인한다.

    e(g1.lhs, g2.lhs) == e(g1.rhs, g2.rhs)

두 페어링을 따로 계산하지 않고, Miller loop 두 개의 곱에
최종 지수승을 한 번만 적용한다.

    FE( ML(g1.lhs, g2.lhs) · ML(-g1.rhs, g2.rhs) ) == 1

e(-P, Q) = e(P, Q)⁻¹ 이므로 위 식은 e₁ · e₂⁻¹ = 1 과 같다.
"""

import logging

from ptau.field import GT_ONE, ec_neg, miller_loop, final_exponentiate


logger = logging.getLogger(__name__)


def same_ratio(g1_key, g2_key):
    """g1_key.lhs/g1_key.rhs 와 g2_key.rhs/g2_key.lhs 의 비율이 같은지 검사한다.

    Args:
        g1_key: G1 점으로 이루어진 VerificationKey
        g2_key: G2 점으로 이루어진 VerificationKey

    Returns:
        bool: e(g1.lhs, g2.lhs) == e(g1.rhs, g2.rhs)

    Raises:
        ValueError: 키의 한쪽이 설정되지 않았을 때
    """
    if not g1_key.complete or not g2_key.complete:
        raise ValueError("lhs와 rhs가 모두 설정된 키만 검사할 수 있습니다")

    miller_result = (
        miller_loop(g1_key.lhs, g2_key.lhs)
        * miller_loop(ec_neg(g1_key.rhs), g2_key.rhs)
    )
    result = final_exponentiate(miller_result) == GT_ONE
    logger.debug("same_ratio -> %s", result)
    return result
