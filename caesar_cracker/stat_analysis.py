"""Подбор ключа статистическим анализом.

Считаем относительные частоты символов алфавита в зашифрованном тексте и в
репрезентативном (незашифрованном) образце, затем для каждого сдвига
вычисляем χ² между ними. Ключ с минимальным χ² считается наиболее вероятным.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Sequence, TextIO, Tuple

from .alphabet import ALPHABET, Alphabet
from .cipher import read_chars, transform_stream

logger = logging.getLogger(__name__)

SourceFactory = Callable[[], TextIO]


@dataclass(frozen=True)
class StatResult:
    key: int
    chi_squared: float


def count_frequencies(reader: TextIO, alphabet: Alphabet = ALPHABET) -> List[int]:
    counts = [0] * len(alphabet)
    for ch in read_chars(reader):
        if ch in alphabet:
            counts[alphabet.index_of(ch)] += 1
    return counts


def normalize(counts: Sequence[float]) -> Tuple[float, ...]:
    total = sum(counts)
    if total <= 0:
        # пустой файл или нет символов алфавита: оставляем нули
        return tuple(0.0 for _ in counts)
    return tuple(c / total for c in counts)


def build_distribution(reader: TextIO, alphabet: Alphabet = ALPHABET) -> Tuple[float, ...]:
    return normalize(count_frequencies(reader, alphabet))


def chi_squared(dist_encrypted: Sequence[float], dist_sample: Sequence[float], key: int) -> float:
    """
    χ² = Σ (E[(i+key) % n] - S[i])² / S[i], слагаемые с S[i] == 0 пропускаются.
    Символ образца с индексом i после шифрования ключом key стоит на (i+key) % n.
    """
    n = len(dist_sample)
    chi2 = 0.0
    for i, s in enumerate(dist_sample):
        if s > 0:
            diff = dist_encrypted[(i + key) % n] - s
            chi2 += diff * diff / s
    return chi2


def find_best_key(dist_encrypted: Sequence[float], dist_sample: Sequence[float]) -> StatResult:
    best_key, min_chi2 = 0, float("inf")
    for key in range(len(dist_sample)):
        chi2 = chi_squared(dist_encrypted, dist_sample, key)
        logger.debug("stat analysis: key=%d chi2=%.6f", key, chi2)
        if chi2 < min_chi2:
            best_key, min_chi2 = key, chi2
    return StatResult(best_key, min_chi2)


def analyze(open_source: SourceFactory, open_sample: SourceFactory,
            alphabet: Alphabet = ALPHABET) -> StatResult:
    """Только выбор ключа: оба источника читаются до конца, ничего не пишется."""
    with open_sample() as reader:
        dist_sample = build_distribution(reader, alphabet)
    with open_source() as reader:
        dist_encrypted = build_distribution(reader, alphabet)

    result = find_best_key(dist_encrypted, dist_sample)
    logger.info("stat analysis: best key=%d chi2=%.6f", result.key, result.chi_squared)
    return result


def crack_by_stat_analysis(open_source: SourceFactory, open_sample: SourceFactory,
                           writer: TextIO, alphabet: Alphabet = ALPHABET) -> StatResult:
    result = analyze(open_source, open_sample, alphabet)
    # Окончательная расшифровка найденным ключом
    with open_source() as reader:
        transform_stream(reader, writer, result.key, True, alphabet)
    return result


def frequency_table(distribution: Sequence[float],
                    alphabet: Alphabet = ALPHABET) -> List[Tuple[str, float]]:
    rows = [(alphabet.char_at(i), p) for i, p in enumerate(distribution) if p > 0]
    return sorted(rows, key=lambda x: x[1], reverse=True)
