import pytest

from account_platform.auth import extract_token


@pytest.mark.parametrize(
    "header,expected",
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("abc.def.ghi", "abc.def.ghi"),
        ("Bearer   abc  ", "abc"),
        ("Bearer ", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_token(header, expected):
    assert extract_token(header) == expected


def test_prefix_match_is_literal():
    # Only the exact "Bearer " prefix is stripped.
    assert extract_token("bearer abc") == "bearer abc"
