"""Текстовый отчёт с результатами поиска в виде таблицы фиксированной ширины."""
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Union

LINE_WIDTH = 10
DATA_WIDTH = 40
RULE_WIDTH = 43

ALL_FOUND = "All patterns found"


@dataclass(frozen=True)
class ReportRow:
    """Строка отчёта: номер строки файла, поле и описание совпадения."""

    line_no: int
    data: str
    match: Union[int, str]


def format_header(title: str) -> str:
    return (
        f"{'=' * RULE_WIDTH}\n"
        f"{title}\n"
        f"{'-' * RULE_WIDTH}\n"
        f"{'Line':<{LINE_WIDTH}}{'Data':<{DATA_WIDTH}}Match Index\n"
        f"{'-' * RULE_WIDTH}\n"
    )


def format_row(row: ReportRow) -> str:
    return f"{row.line_no:<{LINE_WIDTH}}{row.data:<{DATA_WIDTH}}{row.match}\n"


def format_footer(elapsed_ms: float) -> str:
    return (
        f"{'-' * RULE_WIDTH}\n"
        f"Execution time: {elapsed_ms:.3f} ms\n"
        f"{'=' * RULE_WIDTH}\n\n"
    )


def render_report(title: str, rows: Iterable[ReportRow], elapsed_ms: float) -> str:
    """
    Собирает отчёт: заголовок, строки с совпадениями и подвал
    со временем выполнения.
    """
    parts = [format_header(title)]
    parts.extend(format_row(row) for row in rows)
    parts.append(format_footer(elapsed_ms))
    return ''.join(parts)


def write_report(path: Union[str, Path],
                 title: str,
                 rows: Iterable[ReportRow],
                 elapsed_ms: float) -> bool:
    """
    Записывает отчёт в файл, если есть хотя бы одно совпадение.

    :return: True, если файл записан
    """
    rows = list(rows)
    if not rows:
        return False

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as out:
        out.write(render_report(title, rows, elapsed_ms))
    return True
