import pytest

from filedb.ident import is_valid


@pytest.mark.parametrize("name", ["a", "Z9", "snake_case", "kebab-case", "-_-", "0123"])
def test_valid_identifiers(name):
    assert is_valid(name)


@pytest.mark.parametrize(
    "name", ["", "nope!", "hack/slash", "+", "oh no", ".", "..", "a.b", "tab\t", "end\n", "é"]
)
def test_invalid_identifiers(name):
    assert not is_valid(name)


def test_non_string_is_invalid():
    assert not is_valid(None)
    assert not is_valid(b"abc")
    assert not is_valid(12)
