import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from snarkkit.arithmetic import BN254_FQ, BN254_FR
from snarkkit.curve import BN254_G1

G = BN254_G1.generator
small = st.integers(min_value=0, max_value=2000)
positive = st.integers(min_value=1, max_value=2000)


def test_generator_coordinates():
    assert G.coordinates() == (BN254_FQ(1), BN254_FQ(2))


def test_is_on_curve():
    assert BN254_G1.is_on_curve(1, 2)
    assert not BN254_G1.is_on_curve(1, 3)


def test_point_off_curve_raises():
    with pytest.raises(ValueError):
        BN254_G1.point(1, 3)


def test_identity_is_neutral():
    identity = BN254_G1.identity()
    assert identity.is_identity()
    assert identity.coordinates() is None
    assert G + identity == G
    assert identity + G == G
    assert identity.double() == identity


def test_double_equals_addition():
    assert G.double() == G + G
    assert G * 2 == G + G


def test_subtracting_self_is_identity():
    g = BN254_G1.point(1, 2)
    assert (g - g) == BN254_G1.identity()
    assert (g + (-g)) == BN254_G1.identity()


def test_group_order_is_scalar_modulus():
    g = BN254_G1.point(1, 2)
    assert g * BN254_FR.modulus == BN254_G1.identity()
    assert g * (BN254_FR.modulus + 1) == BN254_G1.point(1, 2)


@settings(max_examples=25)
@given(small, small)
def test_scalar_multiplication_distributes(a, b):
    g = BN254_G1.point(1, 2)
    assert g * (a + b) == g * a + g * b


@settings(max_examples=25)
@given(positive)
def test_multiples_stay_on_curve(k):
    point = BN254_G1.point(1, 2) * k
    assert not point.is_identity()
    x, y = point.coordinates()
    assert BN254_G1.is_on_curve(x, y)
    assert BN254_G1.point(x, y) == point


def test_field_element_and_negative_scalars():
    assert BN254_FR(5) * G == G * 5
    assert G * -3 == -(G * 3)
    assert 3 * G == G + G + G


def test_addition_is_associative():
    g = BN254_G1.point(1, 2)
    p, q, r = g * 3, g * 7, g * 11
    assert (p + q) + r == p + (q + r)
    assert p + q == q + p
    assert (p + q + r) == BN254_G1.point(1, 2) * 21