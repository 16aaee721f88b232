"""Операции над файлами, общие для консоли и графического интерфейса.

Каждая операция сначала проверяет пути (и ключ), потом открывает потоки в
CP1251 и вызывает шифр или один из взломщиков. Файл-назначение открывается
на запись последним, когда все входы уже прочитаны или хотя бы проверены.
"""
from pathlib import Path

from .alphabet import ALPHABET
from .brute_force import crack_by_brute_force, dump_all_variants, write_report
from .cipher import transform_stream
from .fileio import open_reader, open_writer, source
from .stat_analysis import analyze
from .validation import Validator

VAL = Validator(len(ALPHABET))


def transform_file(input_path, output_path, key: int, decrypt: bool = False) -> Path:
    input_path = VAL.ensure_file_readable(input_path)
    output_path = VAL.ensure_parent_writable(output_path)
    VAL.ensure_distinct(input_path, output_path)
    VAL.ensure_key_in_range(key)
    with open_reader(input_path) as r, open_writer(output_path) as w:
        transform_stream(r, w, key, decrypt, ALPHABET)
    return output_path


def brute_force_file(input_path, output_path, all_variants: bool = False):
    """Отчёт с лучшим ключом, или (all_variants) все N расшифровок. Во втором случае вернёт None."""
    input_path = VAL.ensure_file_readable(input_path)
    output_path = VAL.ensure_parent_writable(output_path)
    VAL.ensure_distinct(input_path, output_path)
    if all_variants:
        with open_writer(output_path) as w:
            dump_all_variants(source(input_path), w, ALPHABET)
        return None
    result = crack_by_brute_force(source(input_path), ALPHABET)
    with open_writer(output_path) as w:
        write_report(result, w)
    return result


def stat_crack_file(input_path, sample_path, output_path):
    input_path = VAL.ensure_file_readable(input_path)
    sample_path = VAL.ensure_file_readable(sample_path)
    output_path = VAL.ensure_parent_writable(output_path)
    VAL.ensure_distinct(input_path, output_path)
    VAL.ensure_distinct(sample_path, output_path)

    result = analyze(source(input_path), source(sample_path), ALPHABET)
    with open_reader(input_path) as r, open_writer(output_path) as w:
        transform_stream(r, w, result.key, True, ALPHABET)
    return result
