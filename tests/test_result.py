import pytest

from opchain.result import Err, Ok, TryCallError


def test_ok_unwrap_returns_value():
    assert Ok(2).unwrap() == 2


def test_err_unwrap_raises_with_error():
    with pytest.raises(TryCallError) as info:
        Err("x is odd").unwrap()
    assert info.value.error == "x is odd"


def test_err_unwrap_message_mentions_error():
    with pytest.raises(TryCallError, match="x is odd"):
        Err("x is odd").unwrap()


def test_equality_by_kind_and_payload():
    assert Ok(15) == Ok(15)
    assert Err(15) == Err(15)
    assert Ok(15) != Err(15)
    assert Ok(1) != Ok(2)


def test_pattern_matching():
    def describe(result):
        match result:
            case Ok(value):
                return ("ok", value)
            case Err(error):
                return ("err", error)

    assert describe(Ok(3)) == ("ok", 3)
    assert describe(Err("bad")) == ("err", "bad")


def test_results_are_immutable():
    result = Ok(1)
    with pytest.raises(AttributeError):
        result.value = 2
    assert result.unwrap() == 1