"""
Tests for ptau_serializers: FR, G1, G2, Transcript, PreparedRange, report.
"""

import json
import random

import pytest

from ptau.field import FR, G1, G2, Z1, Z2, ec_eq, ec_mul, is_inf, normalize
from ptau.transcript import prepare_range

from ptau_serializers import (
    serialize_fr, deserialize_fr,
    serialize_g1, deserialize_g1,
    serialize_g2, deserialize_g2,
    serialize_transcript, deserialize_transcript,
    serialize_prepared, deserialize_prepared,
    serialize_report,
)

from conftest import make_non_subgroup_g2_point, make_transcript


class TestScalars:
    def test_fr_is_decimal_string(self):
        assert serialize_fr(FR(42)) == "42"
        assert deserialize_fr("42") == FR(42)


class TestG1:
    def test_generator(self):
        assert serialize_g1(G1) == ["1", "2"]

    def test_projective_point_normalized(self):
        P = ec_mul(G1, 77)
        assert ec_eq(deserialize_g1(serialize_g1(P)), P)

    def test_infinity(self):
        assert serialize_g1(Z1) is None
        assert is_inf(deserialize_g1(None))

    def test_off_curve_rejected(self):
        with pytest.raises(ValueError):
            deserialize_g1(["1", "3"])

    def test_wrong_arity_rejected(self):
        with pytest.raises(ValueError):
            deserialize_g1(["1"])


class TestG2:
    def test_point(self):
        P = ec_mul(G2, 5)
        data = serialize_g2(P)
        assert len(data) == 2 and all(len(c) == 2 for c in data)
        assert ec_eq(deserialize_g2(data), P)

    def test_infinity(self):
        assert serialize_g2(Z2) is None
        assert is_inf(deserialize_g2(None))

    def test_off_curve_rejected(self):
        data = serialize_g2(G2)
        data[1][0] = str(int(data[1][0]) + 1)
        with pytest.raises(ValueError):
            deserialize_g2(data)

    def test_g1_data_rejected(self):
        with pytest.raises(ValueError):
            deserialize_g2(["1", "2"])


class TestTranscript:
    def test_json_compatible(self):
        t = make_transcript(degree=2, generator_polynomial=[1, 2, 3])
        data = json.loads(json.dumps(serialize_transcript(t)))
        restored = deserialize_transcript(data)
        assert restored.degree == 2
        assert restored.generator_polynomial == [FR(1), FR(2), FR(3)]
        assert all(ec_eq(a, b) for a, b in zip(restored.g2_alpha_x, t.g2_alpha_x))

    def test_restored_transcript_verifies(self):
        t = make_transcript(degree=2)
        restored = deserialize_transcript(serialize_transcript(t))
        assert restored.verify(rng=random.Random(0)).ok

    def test_missing_field(self):
        data = serialize_transcript(make_transcript(degree=2))
        del data["g2_x"]
        with pytest.raises(ValueError, match="g2_x"):
            deserialize_transcript(data)

    def test_generator_optional(self):
        data = serialize_transcript(make_transcript(degree=2))
        del data["generator_polynomial"]
        assert deserialize_transcript(data).generator_polynomial is None


class TestPrepared:
    def test_prepared(self):
        prepared = prepare_range(make_transcript(degree=2, generator_polynomial=[4, 5, 6]))
        data = serialize_prepared(prepared)
        assert data["g1_x"][0] == ["1", "2"]
        assert data["generator_polynomial"] == ["4", "5", "6"]
        assert deserialize_prepared(data).degree == 2


class TestReport:
    def test_report(self):
        t = make_transcript(degree=2, g1_alpha=2, g2_alpha=3)
        data = serialize_report(t.verify(rng=random.Random(0)))
        assert data["valid"] is False
        assert data["failed"] == ["alpha_binding"]
        assert data["elapsed"] >= 0


class TestMalformedJson:
    @pytest.mark.parametrize("field", ["g1_x", "g1_alpha_x", "g2_x", "g2_alpha_x"])
    def test_sequence_not_a_list(self, field):
        data = serialize_transcript(make_transcript(degree=2))
        data[field] = 5
        with pytest.raises(ValueError, match=field):
            deserialize_transcript(data)

    def test_g1_point_is_bare_number(self):
        data = serialize_transcript(make_transcript(degree=2))
        data["g1_x"] = [5, data["g1_x"][1]]
        with pytest.raises(ValueError, match=r"g1_x\[0\]"):
            deserialize_transcript(data)

    def test_g2_point_is_bare_number(self):
        data = serialize_transcript(make_transcript(degree=2))
        data["g2_x"][1] = 7
        with pytest.raises(ValueError, match=r"g2_x\[1\]"):
            deserialize_transcript(data)

    def test_g2_coordinate_pair_is_number(self):
        with pytest.raises(ValueError):
            deserialize_g2([1, 2])

    @pytest.mark.parametrize("coordinate", [None, [1], {"x": 1}, True, 1.5])
    def test_bad_coordinate(self, coordinate):
        with pytest.raises(ValueError):
            deserialize_g1([coordinate, "2"])

    def test_non_decimal_string(self):
        with pytest.raises(ValueError):
            deserialize_g1(["one", "2"])

    def test_generator_not_a_list(self):
        data = serialize_transcript(make_transcript(degree=2))
        data["generator_polynomial"] = "123"
        with pytest.raises(ValueError, match="generator_polynomial"):
            deserialize_transcript(data)

    def test_body_not_an_object(self):
        with pytest.raises(ValueError):
            deserialize_transcript([1, 2])

    def test_g2_point_outside_subgroup(self):
        P = make_non_subgroup_g2_point()
        x, y = normalize(P)
        data = [[str(c) for c in x.coeffs], [str(c) for c in y.coeffs]]
        with pytest.raises(ValueError, match="부분군"):
            deserialize_g2(data)

    def test_prepared_rechecks_points(self):
        data = serialize_prepared(prepare_range(make_transcript(degree=2)))
        data["g1_x"][1] = ["1", "3"]
        with pytest.raises(ValueError):
            deserialize_prepared(data)
