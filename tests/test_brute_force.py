import io
from functools import partial

import pytest

from caesar_cracker.alphabet import MOD
from caesar_cracker.brute_force import (
    PENALTY,
    BruteForceResult,
    crack_by_brute_force,
    dump_all_variants,
    score_by_syllables,
    split_to_syllables,
    write_report,
)
from caesar_cracker.cipher import caesar_cipher


@pytest.mark.parametrize("word,expected", [
    ("мама", ["мам", "а"]),
    ("строка", ["строк", "а"]),
    ("аэро", ["аэр", "о"]),
    ("текст", ["текст"]),
    ("кнтр", []),
    ("", []),
])
def test_split_to_syllables(word, expected):
    assert list(split_to_syllables(word)) == expected


def test_segmentation_is_not_restartable():
    gen = split_to_syllables("мама")
    assert list(gen) == ["мам", "а"]
    assert list(gen) == []


def test_score_counts_syllables():
    assert score_by_syllables("мама мыла раму") == 6


def test_score_penalizes_words_without_vowels():
    assert score_by_syllables("бк мама") == 2 - PENALTY
    assert score_by_syllables("бк вс") == -2 * PENALTY


def test_score_ignores_non_letters():
    assert score_by_syllables("123, !?  ") == 0


def test_recovers_key_seven(ryaba):
    ciphertext = caesar_cipher(ryaba, 7)
    result = crack_by_brute_force(partial(io.StringIO, ciphertext))
    assert result.key == 7
    assert result.text == ryaba
    assert result.score == score_by_syllables(ryaba)


def test_brute_force_is_deterministic(ryaba):
    ciphertext = caesar_cipher(ryaba, 22)
    first = crack_by_brute_force(partial(io.StringIO, ciphertext))
    second = crack_by_brute_force(partial(io.StringIO, ciphertext))
    assert first == second


def test_source_reopened_for_every_key():
    opened = []

    def open_source():
        reader = io.StringIO("мама")
        opened.append(reader)
        return reader

    crack_by_brute_force(open_source)
    assert len(opened) == MOD
    assert all(r.closed for r in opened)


def test_first_key_wins_ties():
    # в тексте нет букв: все оценки равны нулю
    result = crack_by_brute_force(partial(io.StringIO, "123"))
    assert result.key == 0
    assert result.score == 0


def test_io_errors_propagate():
    def broken():
        raise FileNotFoundError("нет файла")

    with pytest.raises(FileNotFoundError):
        crack_by_brute_force(broken)


def test_write_report():
    out = io.StringIO()
    write_report(BruteForceResult(7, 18.0, "текст"), out)
    assert out.getvalue() == "Найден ключ: 7\nОценка слогов: 18.000\n\nтекст"


def test_dump_all_variants():
    ciphertext = caesar_cipher("мама", 3)
    out = io.StringIO()
    dump_all_variants(partial(io.StringIO, ciphertext), out)
    blocks = out.getvalue().split("\n\n")
    assert len(blocks) == MOD
    assert blocks[0] == f"----- Key = 0 -----\n{ciphertext}"
    assert blocks[3] == "----- Key = 3 -----\nмама"
    assert blocks[-1].startswith(f"----- Key = {MOD - 1} -----\n")
