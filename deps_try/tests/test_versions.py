import pytest

from deps_try.errors import VersionParseError
from deps_try.versions import at_least, parse_version


def test_parse_version_ignores_trailing_content():
    assert parse_version("1.11.1.1273") == (1, 11, 1, 1273)
    assert parse_version("1.11.1.1273-SNAPSHOT") == (1, 11, 1, 1273)


@pytest.mark.parametrize("bad", ["1.11.1", "v1.11.1.1273", "", "1.x.1.2", "Clojure CLI version 1.11.1.1273"])
def test_parse_version_rejects_malformed(bad):
    with pytest.raises(VersionParseError):
        parse_version(bad)


@pytest.mark.parametrize(
    "minimum, actual, expected",
    [
        ("1.11.1.1273", "1.11.1.1273", True),   # equal build is enough
        ("1.11.1.1273", "1.11.1.1274", True),
        ("1.11.1.1273", "1.11.1.1272", False),
        ("1.11.1.1273", "1.11.2.0", True),
        ("1.11.1.1273", "1.12.0.0", True),
        ("1.11.1.1273", "2.0.0.0", True),
        ("1.11.1.1273", "1.10.9.9999", False),
        ("1.11.1.1273", "0.99.99.9999", False),
    ],
)
def test_at_least(minimum, actual, expected):
    assert at_least(minimum, actual) is expected


def test_at_least_matches_tuple_ordering():
    versions = ["1.0.0.0", "1.0.0.1", "1.0.1.0", "1.1.0.0", "2.0.0.0", "1.10.3.1087"]
    for a in versions:
        for b in versions:
            assert at_least(a, b) == (parse_version(a) <= parse_version(b))


def test_at_least_fails_instead_of_returning_false():
    """A malformed version must not silently count as 'too old'."""
    with pytest.raises(VersionParseError):
        at_least("1.11.1.1273", "unknown")
    with pytest.raises(VersionParseError):
        at_least("garbage", "1.11.1.1273")
