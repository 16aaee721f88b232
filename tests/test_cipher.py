import io

import pytest

from caesar_cracker.alphabet import ALPHABET, MOD
from caesar_cracker.cipher import caesar_cipher, normalize_key, shift_chars, transform_stream


def test_privet_example():
    encrypted = caesar_cipher("привет", 3)
    expected = "".join(ALPHABET.char_at((ALPHABET.index_of(ch) + 3) % MOD) for ch in "привет")
    assert encrypted == expected == "тумеих"
    assert caesar_cipher(encrypted, 3, encrypt=False) == "привет"


def test_wraps_around_end_of_alphabet():
    # пробел последний в алфавите, за ним снова «а»
    assert caesar_cipher(" ", 1) == "а"
    assert caesar_cipher("а", 1, encrypt=False) == " "


@pytest.mark.parametrize("key", range(MOD))
def test_round_trip(key, ryaba):
    text = ryaba + "\nLatin 123 и Ёжик\r\n"
    assert caesar_cipher(caesar_cipher(text, key), key, encrypt=False) == text


def test_non_alphabet_symbols_pass_through():
    text = "ABC 123\n\tЁЙЮ-;"
    for key in (1, 13, 39):
        out = caesar_cipher(text, key)
        for src, dst in zip(text, out):
            if src not in ALPHABET:
                assert src == dst
    assert caesar_cipher("ABC123ЁЙЮ-;", 5) == "ABC123ЁЙЮ-;"


def test_output_has_same_length(ryaba):
    assert len(caesar_cipher(ryaba, 11)) == len(ryaba)


@pytest.mark.parametrize("key", range(-MOD - 1, MOD))
@pytest.mark.parametrize("encrypt", [True, False])
def test_key_normalization(key, encrypt, ryaba):
    base = caesar_cipher(ryaba, key, encrypt)
    assert caesar_cipher(ryaba, key + MOD, encrypt) == base
    assert caesar_cipher(ryaba, key - MOD, encrypt) == base


def test_normalize_key():
    assert normalize_key(-1, 40) == 39
    assert normalize_key(40, 40) == 0
    assert normalize_key(83, 40) == 3


def test_shift_chars_is_lazy():
    gen = shift_chars(iter("аб"), 1)
    assert next(gen) == "б"
    assert next(gen) == "в"
    with pytest.raises(StopIteration):
        next(gen)


class OneCharReader(io.StringIO):
    def read(self, size=-1):
        assert size == 1
        return super().read(size)


def test_transform_stream_reads_one_char_at_a_time():
    out = io.StringIO()
    transform_stream(OneCharReader("мир"), out, 2)
    assert out.getvalue() == caesar_cipher("мир", 2)


def test_custom_alphabet():
    from caesar_cracker.alphabet import Alphabet

    abc = Alphabet("abc")
    assert caesar_cipher("abcd", 1, alphabet=abc) == "bcad"
