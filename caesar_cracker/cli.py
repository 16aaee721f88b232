"""Консольный интерфейс.

Подкоманды argparse для скриптов и текстовое меню для ручной работы:
  1) Encrypt      – шифрование с указанным ключом
  2) Decrypt      – расшифровка по известному ключу
  3) Brute Force  – взлом перебором всех ключей
  4) Stat Crack   – взлом статистическим анализом
  0) Exit         – выход
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .alphabet import ALPHABET
from .operations import VAL, brute_force_file, stat_crack_file, transform_file

logger = logging.getLogger(__name__)


# ================== МЕНЮ ==================
class Menu:
    def __init__(self, stdin=None, stdout=None, stderr=None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr

    def say(self, text=""):
        self.stdout.write(text + "\n")
        self.stdout.flush()

    def ask(self, prompt: str) -> str:
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return line.strip()

    def ask_key(self) -> int:
        return VAL.parse_key(self.ask(f"Ключ (0-{len(ALPHABET) - 1}): "))

    def run(self) -> int:
        actions = {
            "1": self.encrypt_flow,
            "2": self.decrypt_flow,
            "3": self.brute_flow,
            "4": self.stat_flow,
        }
        while True:
            self.say("\n==== Caesar Cipher CLI ====")
            self.say("1) Encrypt   2) Decrypt   3) Brute Force   4) Stat Crack   0) Exit")
            try:
                cmd = self.ask("> ")
            except EOFError:
                self.say()
                return 0
            if cmd == "0":
                self.say("Выход.")
                return 0
            action = actions.get(cmd)
            if action is None:
                self.say("Не понимаю команду, введите цифру 0–4.")
                continue
            try:
                action()
            except EOFError:
                self.say()
                return 0
            except (OSError, ValueError) as e:
                logger.debug("menu action %s failed", cmd, exc_info=True)
                self.stderr.write(f"Ошибка: {e}\n")

    def encrypt_flow(self):
        input_path = self.ask("Файл-источник     : ")
        output_path = self.ask("Файл-назначение   : ")
        key = self.ask_key()
        out = transform_file(input_path, output_path, key, decrypt=False)
        self.say(f"Успех: зашифровано → {out.name}")

    def decrypt_flow(self):
        input_path = self.ask("Файл-источник     : ")
        output_path = self.ask("Файл-назначение   : ")
        key = self.ask_key()
        out = transform_file(input_path, output_path, key, decrypt=True)
        self.say(f"Успех: расшифровано → {out.name}")

    def brute_flow(self):
        input_path = self.ask("Файл-источник     : ")
        output_path = self.ask("Файл-назначение   : ")
        mode = self.ask("Все варианты? (y/N): ").lower()
        result = brute_force_file(input_path, output_path, all_variants=mode in ("y", "д"))
        if result is None:
            self.say(f"Brute Force: все возможные варианты записаны в {Path(output_path).name}")
        else:
            self.say(f"Brute Force: ключ {result.key}, оценка {result.score:.3f} → {Path(output_path).name}")

    def stat_flow(self):
        input_path = self.ask("Файл-источник     : ")
        sample_path = self.ask("Файл-образец      : ")
        output_path = self.ask("Файл-назначение   : ")
        result = stat_crack_file(input_path, sample_path, output_path)
        self.say(f"Статистический анализ выбрал ключ → {result.key} (χ² = {result.chi_squared:.6f})")
        self.say(f"Готово! Файл расшифрован в: {output_path}")


# ================== ARGPARSE ==================
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="caesar-cracker",
        description="Шифр Цезаря над русским алфавитом: шифрование и взлом.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Подробный лог (DEBUG)")
    sub = parser.add_subparsers(dest="command")

    for name, help_text in (("encrypt", "Зашифровать файл"), ("decrypt", "Расшифровать файл")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("input", help="Файл-источник")
        p.add_argument("output", help="Файл-назначение")
        p.add_argument("-k", "--key", type=int, required=True,
                       help=f"Ключ (0..{len(ALPHABET) - 1})")

    p = sub.add_parser("brute", help="Взлом перебором (оценка по слогам)")
    p.add_argument("input", help="Зашифрованный файл")
    p.add_argument("output", help="Файл для отчёта")
    p.add_argument("--all", action="store_true", dest="all_variants",
                   help="Записать все варианты расшифровки без оценки")

    p = sub.add_parser("stat", help="Взлом статистическим анализом")
    p.add_argument("input", help="Зашифрованный файл")
    p.add_argument("output", help="Файл для расшифровки")
    p.add_argument("-s", "--sample", required=True, help="Репрезентативный незашифрованный текст")

    sub.add_parser("menu", help="Текстовое меню (по умолчанию)")
    sub.add_parser("gui", help="Графический интерфейс")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command in (None, "menu"):
        return Menu().run()
    if args.command == "gui":
        from .gui import run_gui
        return run_gui()

    try:
        if args.command in ("encrypt", "decrypt"):
            decrypt = args.command == "decrypt"
            out = transform_file(args.input, args.output, args.key, decrypt=decrypt)
            print(f"Успех: {'расшифровано' if decrypt else 'зашифровано'} → {out.name}")
        elif args.command == "brute":
            result = brute_force_file(args.input, args.output, args.all_variants)
            if result is None:
                print(f"Brute Force: все возможные варианты записаны в {Path(args.output).name}")
            else:
                print(f"Найден ключ: {result.key} (оценка слогов {result.score:.3f})")
        elif args.command == "stat":
            result = stat_crack_file(args.input, args.sample, args.output)
            print(f"Статистический анализ выбрал ключ → {result.key} (χ² = {result.chi_squared:.6f})")
    except (OSError, ValueError) as e:
        print(f"Ошибка: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
