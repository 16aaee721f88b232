from .alphabet import ALPHABET, MOD, Alphabet, build_alphabet, preprocess_text
from .brute_force import (
    BruteForceResult,
    crack_by_brute_force,
    dump_all_variants,
    score_by_syllables,
    split_to_syllables,
    write_report,
)
from .cipher import caesar_cipher, normalize_key, transform_stream
from .stat_analysis import (
    StatResult,
    analyze,
    build_distribution,
    chi_squared,
    crack_by_stat_analysis,
    find_best_key,
)
from .validation import Validator

__version__ = "1.0.0"
