from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable
from taskbook.domain.enums import TaskKind
from taskbook.domain.errors import ParseError, TaskValidationError
from taskbook.domain.dates import parse_date
from taskbook.domain.task import Task, Todo, Deadline, Event, RECORD_SEPARATOR

logger = logging.getLogger(__name__)

### COMMENTS
# ==========================================================
# Format rekordu (jedna linia = jedno zadanie):
#   T | <0|1> | <name>
#   D | <0|1> | <name> | <yyyy-MM-dd>
#   E | <0|1> | <name> | <yyyy-MM-dd> | <yyyy-MM-dd>
# ==========================================================
# - `Task.to_record()` koduje, `parse_record()` dekoduje; to dokładne odwrotności.
# - `load_records()` pomija uszkodzone linie (ostrzeżenie + log), reszta się wczytuje.

_VARIANTS: dict[TaskKind, type[Task]] = {
    TaskKind.TODO: Todo,
    TaskKind.DEADLINE: Deadline,
    TaskKind.EVENT: Event,
}

_DATE_COUNT = {
    TaskKind.TODO: 0,
    TaskKind.DEADLINE: 1,
    TaskKind.EVENT: 2,
}


@dataclass(frozen=True)
class PersistenceWarning:
    """Pominięta linia magazynu: skąd, który numer, treść i powód."""
    source: str
    lineno: int
    line: str
    reason: str

    def __str__(self):
        return f"{self.source}:{self.lineno}: {self.reason} ({self.line!r})"


@dataclass
class LoadResult:
    tasks: list[Task] = field(default_factory=list)
    warnings: list[PersistenceWarning] = field(default_factory=list)


def parse_record(line: str) -> Task:
    """
        Dekoduje jedną linię rekordu do obiektu `Task`.

        :param line: Linia bez znaku końca linii.
        :raises ParseError: Zła liczba pól, nieznany typ, zła flaga wykonania,
            niepoprawna data albo dane łamiące reguły modelu.
        :return: Odtworzony `Task`.
    """
    fields = line.split(RECORD_SEPARATOR)
    if len(fields) < 3:
        raise ParseError(line, f"oczekiwano co najmniej 3 pol, jest {len(fields)}")

    code, flag, name, *raw_dates = fields
    try:
        kind = TaskKind(code)
    except ValueError:
        raise ParseError(line, f"nieznany typ zadania '{code}'")

    expected = _DATE_COUNT[kind]
    if len(raw_dates) != expected:
        raise ParseError(line, f"typ {kind.value} wymaga {expected + 3} pol, jest {len(fields)}")
    if flag not in ("0", "1"):
        raise ParseError(line, f"flaga wykonania musi byc 0 lub 1, jest '{flag}'")

    try:
        dates = [parse_date(raw) for raw in raw_dates]
    except ParseError as e:
        raise ParseError(line, f"niepoprawna data '{e.text}'")

    try:
        return _VARIANTS[kind](name, *dates, done=(flag == "1"))
    except TaskValidationError as e:
        raise ParseError(line, e.message)


def _check_encoding(line: str) -> str:
    """Linia odczytana z `errors="surrogateescape"` niesie surogaty w miejscu złych bajtów."""
    try:
        line.encode("utf-8")
    except UnicodeEncodeError:
        raise ParseError(
            line.encode("utf-8", "backslashreplace").decode("utf-8"),
            "niepoprawne kodowanie UTF-8",
        )
    return line


def load_records(lines: Iterable[str], source: str = "<records>") -> LoadResult:
    """Wczytuje rekordy w kolejności; puste linie są ignorowane, uszkodzone pomijane z ostrzeżeniem."""
    result = LoadResult()
    for lineno, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        try:
            result.tasks.append(parse_record(_check_encoding(line)))
        except ParseError as e:
            warning = PersistenceWarning(source=source, lineno=lineno, line=e.text, reason=e.message)
            logger.warning("Pominieto uszkodzony rekord %s", warning)
            result.warnings.append(warning)
    return result
