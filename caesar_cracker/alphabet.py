import re
import logging

logger = logging.getLogger(__name__)

# ================== КОНФИГУРАЦИЯ АЛФАВИТА ==================
# Только маленькие русские буквы (без ё, й, ю) + знаки препинания + пробел.
# Порядок символов задаёт индексы, менять его нельзя: от него зависят ключи.
LOWERCASE_CYRILLIC = "абвгдежзиклмнопрстуфхцчшщъыьэя"

# Точка, запятая, кавычки «» и обычные, двоеточие, восклицательный, вопросительный
PUNCTUATION_RU = ".,«»\"':!?"
# Пробел отдельно
SPACE = " "


class Alphabet:
    """Упорядоченная таблица символов с O(1) поиском индекса."""

    def __init__(self, symbols: str):
        if not symbols:
            raise ValueError("Алфавит не может быть пустым.")
        index = {}
        for i, ch in enumerate(symbols):
            if ch in index:
                raise ValueError(f"Символ {ch!r} встречается в алфавите дважды.")
            index[ch] = i
        self._symbols = symbols
        self._index = index
        self._letters = "".join(ch for ch in symbols if ch.isalpha())
        # Слово = максимальная последовательность букв алфавита
        self._word_re = re.compile("[" + re.escape(self._letters) + "]+" if self._letters else "(?!)")

    def __len__(self):
        return len(self._symbols)

    def __contains__(self, ch):
        return ch in self._index

    def __iter__(self):
        return iter(self._symbols)

    def __repr__(self):
        return f"Alphabet({self._symbols!r})"

    def index_of(self, ch: str) -> int:
        return self._index[ch]

    def char_at(self, idx: int) -> str:
        return self._symbols[idx]

    @property
    def symbols(self) -> str:
        return self._symbols

    @property
    def letters(self) -> str:
        return self._letters

    def word_pattern(self):
        return self._word_re


def build_alphabet() -> Alphabet:
    return Alphabet(LOWERCASE_CYRILLIC + PUNCTUATION_RU + SPACE)


ALPHABET = build_alphabet()
MOD = len(ALPHABET)


# ================== ПРЕДОБРАБОТКА ==================
def preprocess_text(text: str, alphabet: Alphabet = ALPHABET, strict: bool = False) -> str:
    """
    1. lower()
    2. Нормализация кавычек: “ ” „ -> ", ‘ ’ -> ', если такие есть в алфавите.
    3. Тире и дефисы превращаются в пробел, если их нет в алфавите.
    4. Любые последовательности пробельных символов -> одиночный пробел.
    5. Удаление всего, что не входит в алфавит (если strict).
    Шифр сам по себе текст не трогает, это отдельный шаг для интерфейсов.
    """
    text = text.lower()

    if "\"" in alphabet:
        text = text.replace("“", "\"").replace("”", "\"").replace("„", "\"")
    if "'" in alphabet:
        text = text.replace("‘", "'").replace("’", "'")

    for dash in "-–—":
        if dash not in alphabet:
            text = text.replace(dash, " ")

    text = re.sub(r'\s+', ' ', text)

    if strict:
        before = len(text)
        text = "".join(ch for ch in text if ch in alphabet)
        logger.debug("preprocess: removed %d symbols outside alphabet", before - len(text))

    return text.strip()
