"""Чтение и запись файлов в одной 8-битной кодировке (CP1251)."""
from functools import partial

# Все символы алфавита есть в CP1251
ENCODING = "cp1251"


def open_reader(path):
    # newline="": шифр видит переводы строк как есть
    return open(path, 'r', encoding=ENCODING, newline='')


def open_writer(path):
    return open(path, 'w', encoding=ENCODING, newline='')


def source(path):
    """Фабрика потоков: каждый вызов открывает файл заново с начала."""
    return partial(open_reader, path)


def read_text(path) -> str:
    with open_reader(path) as f:
        return f.read()


def write_text(path, text: str) -> None:
    with open_writer(path) as f:
        f.write(text)
