import pytest

from vdf_beacon.errors import ArithmeticDomainError
from vdf_beacon.vdf import arith


def test_mod_exp_matches_builtin_pow():
    m = (2**61 - 1) * (2**89 - 1)
    for base, exp in [(2, 10), (3, 2**200 + 7), (m - 1, 2), (0, 5), (5, 0)]:
        assert arith.mod_exp(base, exp, m) == pow(base, exp, m)


def test_mod_exp_accepts_unreduced_base_and_huge_exponent():
    # challenges are 256-bit and used without reduction
    m = 1_000_003
    r = int("ff" * 32, 16)
    assert arith.mod_exp(m + 2, r, m) == pow(2, r, m)


def test_mod_exp_modulus_one_is_zero():
    assert arith.mod_exp(12345, 67, 1) == 0


@pytest.mark.parametrize("modulus", [0, -7])
def test_mod_exp_rejects_non_positive_modulus(modulus):
    with pytest.raises(ArithmeticDomainError) as ei:
        arith.mod_exp(2, 3, modulus)
    assert "modulus" in str(ei.value)


def test_mod_exp_rejects_negative_operands():
    with pytest.raises(ArithmeticDomainError):
        arith.mod_exp(-2, 3, 11)
    with pytest.raises(ArithmeticDomainError):
        arith.mod_exp(2, -3, 11)


def test_arithmetic_domain_error_is_arithmetic_error():
    with pytest.raises(ArithmeticError):
        arith.mod_mul(3, 4, 0)


def test_mod_square_and_mul():
    assert arith.mod_square(7, 11) == 49 % 11
    assert arith.mod_mul(7, 8, 11) == 56 % 11
    # sequential squaring is x^(2^k)
    v = 3
    for _ in range(5):
        v = arith.mod_square(v, 1_000_003)
    assert v == pow(3, 2**5, 1_000_003)
