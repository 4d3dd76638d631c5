import argparse
import sys
import time
from functools import wraps
from itertools import cycle
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from loguru import logger
from termcolor import colored

from report import ALL_FOUND, ReportRow, write_report
from search import ACAutomaton, kmp_search
from text_files import Record, lines_with_words

DEFAULT_DATA_FILE = Path('data') / 'data.txt'
DEFAULT_KMP_RESULT_FILE = Path('data') / 'kmp_result.txt'
DEFAULT_AC_RESULT_FILE = Path('data') / 'ac_result.txt'
DEFAULT_KMP_PATTERNS = ['2720', '628', '4', 'Щ', 'Я']
DEFAULT_AC_PATTERNS = ['6', '2', '8', '7']

KMP_TITLE = "KMP Search Results"
AC_TITLE = "Aho-Corasick Search Results"

COLORS = ['red', 'green', 'yellow', 'blue', 'magenta', 'cyan',
          'light_red', 'light_green', 'light_yellow']


def log_time_decorator(func):
    """
    Декоратор для замера времени выполнения функции.
    Функция возвращает пару (результат, время в миллисекундах).
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug("{} выполнена за {:.3f} мс", func.__name__, elapsed_ms)
        return result, elapsed_ms

    return wrapper


@log_time_decorator
def run_kmp(records: Sequence[Record], patterns: Sequence[str]) -> List[ReportRow]:
    """Ищет каждый шаблон в каждом поле каждой записи алгоритмом КМП."""
    rows: List[ReportRow] = []
    for record in records:
        for field in record.fields:
            for pattern in patterns:
                matches, _ = kmp_search(field, pattern)
                rows.extend(ReportRow(record.line_no, field, idx) for idx in matches)
    return rows


@log_time_decorator
def run_ac(records: Sequence[Record], patterns: Sequence[str]) -> List[ReportRow]:
    """Отбирает поля, в которых встречаются все шаблоны (Ахо-Корасик)."""
    automaton = ACAutomaton(patterns)
    rows: List[ReportRow] = []
    for record in records:
        for field in record.fields:
            if automaton.contains_all(field, len(patterns)):
                rows.append(ReportRow(record.line_no, field, ALL_FOUND))
    return rows


def highlight_text(text: str, matches: Dict[str, List[int]]) -> str:
    """
    Возвращает текст с цветовым выделением найденных подстрок.
    Каждая подстрока выделяется своим цветом, пересекающиеся
    выделения пропускаются.
    """
    if not matches:
        return text

    color_map = dict(zip(matches, cycle(COLORS)))

    highlights = []
    for sub, indices in matches.items():
        for idx in indices:
            if idx >= 0 and idx + len(sub) <= len(text):
                highlights.append((idx, idx + len(sub), color_map[sub]))
    highlights.sort(key=lambda x: x[0])

    parts = []
    last_idx = 0
    for start, end, color in highlights:
        if start >= last_idx:
            parts.append(text[last_idx:start])
            parts.append(colored(text[start:end], color))
            last_idx = end
    parts.append(text[last_idx:])
    return ''.join(parts)


def print_highlighted(records: Sequence[Record], patterns: Sequence[str]) -> None:
    """Печатает поля с совпадениями КМП, подсвечивая найденные шаблоны."""
    for record in records:
        for field in record.fields:
            matches = {}
            for pattern in patterns:
                indices, count = kmp_search(field, pattern)
                if count:
                    matches[pattern] = indices
            if matches:
                print(f"{record.line_no:<6}{highlight_text(field, matches)}")


def configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level='DEBUG' if verbose else 'INFO',
               format="<level>{level}</level>: {message}")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Поиск шаблонов в полях файла данных алгоритмами КМП и Ахо-Корасик.")
    parser.add_argument("-f", "--file", type=Path, default=DEFAULT_DATA_FILE,
                        help="Путь до файла данных")
    parser.add_argument("-k", "--kmp-patterns", type=str, nargs="+",
                        default=DEFAULT_KMP_PATTERNS,
                        help="Шаблоны для поиска КМП (каждое вхождение)")
    parser.add_argument("-a", "--ac-patterns", type=str, nargs="+",
                        default=DEFAULT_AC_PATTERNS,
                        help="Шаблоны Ахо-Корасик (поле должно содержать все)")
    parser.add_argument("--kmp-out", type=Path, default=DEFAULT_KMP_RESULT_FILE,
                        help="Файл отчёта КМП")
    parser.add_argument("--ac-out", type=Path, default=DEFAULT_AC_RESULT_FILE,
                        help="Файл отчёта Ахо-Корасик")
    parser.add_argument("--highlight", action="store_true",
                        help="Вывести поля с подсветкой совпадений КМП")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Подробный вывод в лог")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    # --- 1. Чтение данных ---
    try:
        records = lines_with_words(args.file)
    except OSError as e:
        logger.error("Не удалось прочитать файл '{}': {}", args.file, e)
        return 1

    # --- 2. Поиск ---
    try:
        kmp_rows, kmp_time = run_kmp(records, args.kmp_patterns)
        ac_rows, ac_time = run_ac(records, args.ac_patterns)
    except MemoryError:
        logger.error("Недостаточно памяти для выполнения поиска")
        return 2

    if args.highlight:
        print_highlighted(records, args.kmp_patterns)

    # --- 3. Запись отчётов (только при наличии совпадений) ---
    try:
        kmp_written = write_report(args.kmp_out, KMP_TITLE, kmp_rows, kmp_time)
        ac_written = write_report(args.ac_out, AC_TITLE, ac_rows, ac_time)
    except OSError as e:
        logger.error("Не удалось записать отчёт: {}", e)
        return 1

    print("\nResults written to:")
    if kmp_written:
        print(f" - KMP results: {colored(str(args.kmp_out), 'green')}")
    else:
        print(" - No KMP matches found.")

    if ac_written:
        print(f" - Aho-Corasick results: {colored(str(args.ac_out), 'green')}")
    else:
        print(" - No Aho-Corasick matches found.")

    return 0


if __name__ == "__main__":
    sys.exit(main())
