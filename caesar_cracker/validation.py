import os
from pathlib import Path


class Validator:
    """
    Проверка вводных данных до запуска шифра:
    - файл существует и доступен для чтения
    - родительская папка для результата существует и доступна для записи
    - ключ в диапазоне 0 <= key < длина алфавита
    """

    def __init__(self, alphabet_length: int):
        self.alphabet_length = alphabet_length

    def ensure_file_readable(self, path) -> Path:
        if path is None or str(path).strip() == "":
            raise FileNotFoundError("Путь к файлу не задан.")
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Файл не существует: {path}")
        if path.is_dir():
            raise IsADirectoryError(f"Указанный путь не является файлом: {path}")
        if not path.is_file():
            raise OSError(f"Указанный путь не является файлом: {path}")
        if not os.access(path, os.R_OK):
            raise PermissionError(f"Файл недоступен для чтения: {path}")
        return path

    def ensure_parent_writable(self, path) -> Path:
        if path is None or str(path).strip() == "":
            raise FileNotFoundError("Путь к файлу не задан.")
        path = Path(path)
        # У голого имени файла родитель это текущая папка
        parent = path.parent
        if not parent.exists():
            raise FileNotFoundError(f"Родительская папка не существует: {parent}")
        if not parent.is_dir():
            raise NotADirectoryError(f"Родительский путь не является папкой: {parent}")
        if not os.access(parent, os.W_OK):
            raise PermissionError(f"Нет прав на запись в папку: {parent}")
        return path

    def ensure_distinct(self, input_path, output_path) -> None:
        """Результат нельзя писать в тот же файл, откуда читаем: open('w') обнулит его."""
        input_path, output_path = Path(input_path), Path(output_path)
        if output_path.exists() and os.path.samefile(input_path, output_path):
            raise ValueError(
                f"Файл-назначение совпадает с исходным файлом: {output_path}"
            )

    def ensure_key_in_range(self, key: int) -> int:
        if key < 0 or key >= self.alphabet_length:
            raise ValueError(
                f"Неверный ключ: {key}. Допустимо от 0 до {self.alphabet_length - 1}."
            )
        return key

    def parse_key(self, text: str) -> int:
        text = (text or "").strip()
        if not text:
            raise ValueError("Ключ не может быть пустым.")
        try:
            key = int(text)
        except ValueError:
            raise ValueError(f"Ключ должен быть целым числом, получено: {text!r}") from None
        return self.ensure_key_in_range(key)
