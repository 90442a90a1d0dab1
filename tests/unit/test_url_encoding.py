"""Unit tests for form-style URL encoding."""

import pytest

from connect_xmlapi.transport.url_encoding import url_encode, url_encode_unicode


class TestUrlEncode:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("abcXYZ019", "abcXYZ019"),
            ("!'()*-._", "!'()*-._"),
            ("a b", "a+b"),
            ("a+b", "a%2bb"),
            ("Team Sync / Q&A", "Team+Sync+%2f+Q%26A"),
            ("x=1;y", "x%3d1%3by"),
            ("~", "%7e"),
            ("", ""),
        ],
    )
    def test_ascii(self, value: str, expected: str) -> None:
        assert url_encode(value) == expected

    def test_non_ascii_uses_utf8_bytes(self) -> None:
        assert url_encode("café") == "caf%c3%a9"

    def test_hex_digits_are_lower_case(self) -> None:
        encoded = url_encode("Ünïcode ✓")

        assert encoded == encoded.lower()
        assert "%c3%9c" in encoded
        assert "%e2%9c%93" in encoded


class TestUrlEncodeUnicode:
    def test_bmp_character(self) -> None:
        assert url_encode_unicode("café") == "caf%u00e9"

    def test_ascii_follows_form_rules(self) -> None:
        assert url_encode_unicode("a b&c") == "a+b%26c"

    def test_astral_character_uses_surrogate_pair(self) -> None:
        # U+1F600 -> D83D DE00
        assert url_encode_unicode("\U0001F600") == "%ud83d%ude00"
