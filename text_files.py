"""
Чтение файла данных и разбиение его содержимого.

Функции возвращают содержимое файла в разных видах:
- file_to_string: одна строка без пробельных символов;
- file_to_lines: список непустых строк;
- file_to_words: список слов;
- lines_with_words: записи из трёх групп полей для каждой корректной строки.
"""
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union

from loguru import logger

PathLike = Union[str, Path]

ASCII_WHITESPACE = ' \t\n\r\v\f'
MIN_TOKENS = 6

_LINE_BREAKS = re.compile(r'[\r\n]+')
_WORD_SEPARATORS = re.compile(r'[ \t\r\n]+')
_TOKEN_SEPARATORS = re.compile(r'[ \t\n\r\v\f]+')
_STRIP_WHITESPACE = {ord(char): None for char in ASCII_WHITESPACE}


class MalformedLineError(ValueError):
    """Строка не разбивается на три группы полей."""


@dataclass(frozen=True)
class Record:
    """Корректная строка файла: номер строки и три группы полей."""

    line_no: int
    fields: Tuple[str, str, str]


def _read_text(path: PathLike) -> str:
    # newline='' сохраняет \r, его обрабатывают функции разбиения
    with open(path, 'r', encoding='utf-8', errors='replace', newline='') as f:
        return f.read()


def split_by_lines(content: str) -> List[str]:
    """Разбивает текст на непустые строки; подряд идущие \\n и \\r - один разделитель."""
    return [line for line in _LINE_BREAKS.split(content) if line]


def split_by_words(content: str) -> List[str]:
    """Разбивает текст на слова по пробелам, табуляциям и переводам строк."""
    return [word for word in _WORD_SEPARATORS.split(content) if word]


def split_by_groups(line: str) -> List[str]:
    """
    Делит строку на три группы полей:
    два первых слова, три следующих и все оставшиеся.

    :param line: Строка файла
    :return: Список из трёх групп
    :raises MalformedLineError: если в строке меньше шести слов
    """
    tokens = [token for token in _TOKEN_SEPARATORS.split(line) if token]
    if len(tokens) < MIN_TOKENS:
        raise MalformedLineError(
            f"Неверный формат строки: ожидалось не менее {MIN_TOKENS} слов, "
            f"получено {len(tokens)}")

    return [
        ' '.join(tokens[0:2]),
        ' '.join(tokens[2:5]),
        ' '.join(tokens[5:]),
    ]


def file_to_string(path: PathLike) -> str:
    """Читает файл целиком и удаляет из него все ASCII-пробельные символы."""
    return _read_text(path).translate(_STRIP_WHITESPACE)


def file_to_lines(path: PathLike) -> List[str]:
    return split_by_lines(_read_text(path))


def file_to_words(path: PathLike) -> List[str]:
    return split_by_words(_read_text(path))


def split_physical_lines(content: str) -> List[str]:
    """
    Делит текст только по \\n (с отбрасыванием завершающего \\r), как getline.
    Остальные управляющие символы (\\f, \\v, \\u2028, ...) остаются внутри строки.
    """
    lines = content.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]


def lines_with_words(path: PathLike) -> List[Record]:
    """
    Читает файл и разбивает каждую строку на три группы полей.

    Пустые строки пропускаются с отладочным сообщением, строки неверного
    формата - с предупреждением в логе. Номера строк - физические,
    начиная с 1.

    :param path: Путь к файлу данных
    :return: Список записей в порядке следования строк
    """
    records: List[Record] = []
    for line_no, line in enumerate(split_physical_lines(_read_text(path)), start=1):
        if not line.strip(ASCII_WHITESPACE):
            logger.debug("Строка {} пропущена: пустая строка", line_no)
            continue
        try:
            records.append(Record(line_no, tuple(split_by_groups(line))))
        except MalformedLineError as e:
            logger.warning("Строка {} пропущена: {}", line_no, e)

    logger.debug("Прочитано записей: {} из файла {}", len(records), path)
    return records
