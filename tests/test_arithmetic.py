import pytest


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1 + 2", 3),
        ("10 - 3 - 2", 5),
        ("2 * 3 * 4", 24),
        ("12 / 3", 4),
        ("7 / 2", 3),
        ("-7 / 2", -3),
        ("7 / -2", -3),
        ("1 + 2 * 3", 7),
        ("(1 + 2) * 3", 9),
        ("- 5 + 2", -3),
        ("-(5 + 2)", -7),
        ("100 / 7 * 7 + 100 - 100 / 7 * 7", 100),
        # 32-bit wrap-around
        ("2147483647 + 1", -2147483648),
        ("0 - 2147483647 - 2", 2147483647),
        ("65536 * 65536", 0),
        ("(0 - 2147483647 - 1) / -1", -2147483648),
    ]
)
def test_integer_arithmetic(itp, source, expected):
    result = itp.eval(source)
    assert result == expected
    assert type(result) is int


@pytest.mark.parametrize(
    "source,expected",
    [
        ("3 < 4", True),
        ("4 <= 4", True),
        ("5 > 7", False),
        ("5 >= 7", False),
        ("3 = 3", True),
        ("3 <> 3", False),
        ("-1 < 0", True),
        ("true && false", False),
        ("true || false", True),
        ("false || false", False),
        ("not true", False),
        ("not (1 > 2)", True),
        ("1 + 2 = 3 && 2 < 3", True),
        ("true || false && false", False),
    ]
)
def test_relational_and_boolean(itp, source, expected):
    result = itp.eval(source)
    assert result is expected
