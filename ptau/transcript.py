"""
Powers-of-Tau Transcript 컨테이너와 range 준비
================================================

세리머니 transcript는 네 개의 수열로 이루어진다.

    g1_x        = [x, x², ..., xⁿ]·G1
    g1_alpha_x  = [αx, αx², ..., αxⁿ]·G1
    g2_x        = [x, x², ..., xⁿ]·G2
    g2_alpha_x  = [αx, αx², ..., αxⁿ]·G2

선택적으로 생성 다항식(generator polynomial)의 계수 n+1개가 함께 온다.
이 계수는 검증하지 않고 그대로 전달만 한다.

**Range 준비 (prepare_range)**:
  증명 시스템이 쓰는 형태로 바꾼다. g1_x 앞에 G1 생성자(x⁰·G1)를 붙여
  [1, x, x², ..., xⁿ]·G1 을 만든다.
"""

from ptau.field import FR, G1
from ptau.verifier import InvalidTranscriptError, check_shape, check_transcript


class Transcript:
    """네 개의 점 수열과 (선택적인) 생성 다항식."""

    def __init__(self, g1_x, g1_alpha_x, g2_x, g2_alpha_x, generator_polynomial=None):
        self.g1_x = list(g1_x)
        self.g1_alpha_x = list(g1_alpha_x)
        self.g2_x = list(g2_x)
        self.g2_alpha_x = list(g2_alpha_x)
        self.generator_polynomial = (
            None if generator_polynomial is None
            else [c if isinstance(c, FR) else FR(c) for c in generator_polynomial]
        )

    @property
    def degree(self):
        return len(self.g1_x)

    def check_shape(self):
        """모양을 확인하고 차수를 반환한다.

        Raises:
            InvalidTranscriptError: 수열 모양이 잘못되었거나
                생성 다항식 계수가 degree + 1개가 아닐 때
        """
        n = check_shape(self.g1_x, self.g1_alpha_x, self.g2_x, self.g2_alpha_x)
        if self.generator_polynomial is not None and len(self.generator_polynomial) != n + 1:
            raise InvalidTranscriptError(
                f"생성 다항식 계수는 {n + 1}개여야 합니다: {len(self.generator_polynomial)}"
            )
        return n

    def verify(self, rng=None, max_workers=None):
        """다섯 검사를 모두 실행하고 TranscriptReport를 반환한다."""
        self.check_shape()
        return check_transcript(
            self.g1_x, self.g1_alpha_x, self.g2_x, self.g2_alpha_x,
            rng=rng, max_workers=max_workers,
        )


class PreparedRange:
    """prepare_range의 결과.

    속성:
        g1_x: [G1, x·G1, ..., xⁿ·G1] (n + 1개)
        generator_polynomial: 생성 다항식 계수 (없으면 None)
    """

    def __init__(self, g1_x, generator_polynomial=None):
        self.g1_x = g1_x
        self.generator_polynomial = generator_polynomial

    @property
    def degree(self):
        return len(self.g1_x) - 1


def prepare_range(transcript):
    """transcript를 range 증명용 형태로 변환한다."""
    transcript.check_shape()
    g1_x = [G1] + list(transcript.g1_x)
    generator = (
        None if transcript.generator_polynomial is None
        else list(transcript.generator_polynomial)
    )
    return PreparedRange(g1_x, generator)
