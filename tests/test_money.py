import pytest

from storefront.utils.money import round_money


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, 0.0),
        (7.5, 7.5),
        (0.125, 0.13),
        (2.675, 2.68),
        (10.004, 10.0),
        (33.3333333, 33.33),
    ],
)
def test_round_money_rounds_halves_up(value, expected):
    assert round_money(value) == expected
