from ptau.field import FR, CURVE_ORDER, G1, G2, GROUP_G1, GROUP_G2
from ptau.accumulator import VerificationKey, same_ratio_preprocess
from ptau.pairing_check import same_ratio
from ptau.verifier import (
    InvalidTranscriptError,
    TranscriptReport,
    check_transcript,
    validate_polynomial_evaluation,
    validate_transcript,
)
from ptau.transcript import PreparedRange, Transcript, prepare_range
