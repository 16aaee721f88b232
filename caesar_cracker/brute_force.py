"""Взлом перебором всех ключей с оценкой по слогам.

Чем естественнее текст разбивается на слоги, тем выше оценка. Для каждого
ключа источник открывается заново: поток не обязан уметь перематываться.
"""
import io
import logging
from dataclasses import dataclass
from typing import Callable, Iterator, TextIO

from .alphabet import ALPHABET, Alphabet
from .cipher import transform_stream

logger = logging.getLogger(__name__)

VOWELS = frozenset("аеёиоуыэюя")
# Штраф за слово, которое не удалось разбить ни на один слог
PENALTY = 0.5

SourceFactory = Callable[[], TextIO]


@dataclass(frozen=True)
class BruteForceResult:
    key: int
    score: float
    text: str


def split_to_syllables(word: str) -> Iterator[str]:
    """
    Очень простая разбивка слова на слоги:
    [согласные]*[гласные]{1,2}[согласные]*, жадно, слог за слогом.
    Если после согласных гласной нет, остаток слова не разбивается.
    """
    i, n = 0, len(word)
    while i < n:
        start = i
        while i < n and word[i] not in VOWELS:
            i += 1
        vcount = 0
        while i < n and word[i] in VOWELS and vcount < 2:
            i += 1
            vcount += 1
        if vcount == 0:
            return
        while i < n and word[i] not in VOWELS:
            i += 1
        yield word[start:i]


def score_by_syllables(text: str, alphabet: Alphabet = ALPHABET) -> float:
    total_syllables = 0
    total_bad = 0
    for match in alphabet.word_pattern().finditer(text):
        count = sum(1 for _ in split_to_syllables(match.group()))
        total_syllables += count
        if count == 0:
            total_bad += 1
    return total_syllables - total_bad * PENALTY


def decrypt_to_string(open_source: SourceFactory, key: int,
                      alphabet: Alphabet = ALPHABET) -> str:
    buf = io.StringIO()
    with open_source() as reader:
        transform_stream(reader, buf, key, True, alphabet)
    return buf.getvalue()


def crack_by_brute_force(open_source: SourceFactory,
                         alphabet: Alphabet = ALPHABET) -> BruteForceResult:
    best = None
    for key in range(len(alphabet)):
        text = decrypt_to_string(open_source, key, alphabet)
        score = score_by_syllables(text, alphabet)
        logger.debug("brute force: key=%d score=%.3f", key, score)
        if best is None or score > best.score:
            best = BruteForceResult(key, score, text)
    logger.info("brute force: best key=%d score=%.3f", best.key, best.score)
    return best


def write_report(result: BruteForceResult, writer: TextIO) -> None:
    writer.write(f"Найден ключ: {result.key}\n")
    writer.write(f"Оценка слогов: {result.score:.3f}\n\n")
    writer.write(result.text)
    writer.flush()


def dump_all_variants(open_source: SourceFactory, writer: TextIO,
                      alphabet: Alphabet = ALPHABET) -> None:
    """Режим ручного просмотра: все N расшифровок подряд, без оценки."""
    for key in range(len(alphabet)):
        if key:
            writer.write("\n\n")
        writer.write(f"----- Key = {key} -----\n")
        with open_source() as reader:
            transform_stream(reader, writer, key, True, alphabet)
    writer.flush()
