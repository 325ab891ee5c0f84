import random

import pytest

import url_shortener
from url_shortener import EmptyInputError, TableMismatchError, decode, encode


class TestRoundTrip:
    @pytest.mark.parametrize("text", [
        "abracadabra",
        "https://en.wikipedia.org/wiki/URL_shortening",
        "ab",
        "a b",
        "héllo wörld ✓ 😀",
        "\ud800 lone surrogate",
        "The quick brown fox jumps over the lazy dog" * 20,
    ])
    def test_roundtrip(self, text):
        packed, table = encode(text)
        assert decode(packed, table) == text

    def test_random_strings(self):
        rng = random.Random(7)
        alphabet = "abcdefghijklmnopqrstuvwxyz0123456789-_./?=&"
        for _ in range(50):
            text = "".join(rng.choice(alphabet) for _ in range(rng.randint(1, 120)))
            packed, table = encode(text)
            assert decode(packed, table) == text

    def test_package_exports(self):
        packed, table = url_shortener.encode("abracadabra")
        assert url_shortener.decode(packed, table) == "abracadabra"


class TestScenarios:
    def test_abracadabra(self):
        packed, table = encode("abracadabra")
        assert packed == b"\xa2\x53\xa2"
        assert table.codes() == {"a": "1", "b": "01", "r": "000", "c": "0010", "d": "0011"}

    def test_single_symbol(self):
        packed, table = encode("aaaa")
        assert packed == b"\x00"
        assert decode(packed, table) == "aaaa"

    def test_single_symbol_longer_than_a_byte(self):
        packed, table = encode("z" * 21)
        assert len(packed) == 3
        assert decode(packed, table) == "z" * 21

    def test_empty_input(self):
        with pytest.raises(EmptyInputError):
            encode("")

    def test_compresses_url(self):
        url = "https://en.wikipedia.org/wiki/URL_shortening"
        packed, _ = encode(url)
        assert len(packed) < len(url)

    def test_compresses_english_text(self):
        text = "it was the best of times, it was the worst of times, it was the age of wisdom"
        packed, _ = encode(text)
        assert len(packed) < len(text)

    def test_tables_are_not_interchangeable(self):
        packed, _ = encode("https://example.com/a")
        _, other = encode("https://example.org/" + "b" * 400)
        assert other.symbol_count > len(packed) * 8
        with pytest.raises(TableMismatchError):
            decode(packed, other)

    def test_encode_does_not_share_state(self):
        packed_a, table_a = encode("abracadabra")
        packed_b, table_b = encode("mississippi")
        assert decode(packed_a, table_a) == "abracadabra"
        assert decode(packed_b, table_b) == "mississippi"
