"""Шифр Цезаря над фиксированным алфавитом.

Символ из алфавита сдвигается по кругу на ключ, всё остальное копируется
без изменений. Поток читается и пишется по одному символу, поэтому размер
входа не ограничен.
"""
import io
import logging
from typing import Iterable, Iterator, TextIO

from .alphabet import ALPHABET, Alphabet

logger = logging.getLogger(__name__)


def normalize_key(key: int, size: int) -> int:
    # Отрицательный ключ или ключ >= size заворачиваем в [0, size)
    return ((key % size) + size) % size


def shift_chars(chars: Iterable[str], key: int, decrypt: bool = False,
                alphabet: Alphabet = ALPHABET) -> Iterator[str]:
    mod = len(alphabet)
    key = normalize_key(key, mod)
    for ch in chars:
        if ch in alphabet:
            idx = alphabet.index_of(ch)
            if decrypt:
                yield alphabet.char_at((idx - key + mod) % mod)
            else:
                yield alphabet.char_at((idx + key) % mod)
        else:
            yield ch


def read_chars(reader: TextIO) -> Iterator[str]:
    return iter(lambda: reader.read(1), "")


def transform_stream(reader: TextIO, writer: TextIO, key: int, decrypt: bool = False,
                     alphabet: Alphabet = ALPHABET) -> None:
    """Шифрует (или расшифровывает при decrypt=True) поток reader в writer."""
    logger.debug("transform: key=%d decrypt=%s", key, decrypt)
    for ch in shift_chars(read_chars(reader), key, decrypt, alphabet):
        writer.write(ch)
    writer.flush()


def caesar_cipher(text: str, key: int, encrypt: bool = True,
                  alphabet: Alphabet = ALPHABET) -> str:
    buf = io.StringIO()
    transform_stream(io.StringIO(text), buf, key, not encrypt, alphabet)
    return buf.getvalue()
