from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import ClassVar
from taskbook.domain.enums import TaskKind
from taskbook.domain.errors import TaskValidationError
from taskbook.domain.dates import format_display_date, format_record_date

RECORD_SEPARATOR = " | "
# wszystko, co str.splitlines() traktuje jako koniec linii
LINE_BREAKS = ("\n", "\r", "\v", "\f", "\x1c", "\x1d", "\x1e", "\x85", "\u2028", "\u2029")


def _check_name(name) -> None:
    if not isinstance(name, str) or not name.strip():
        raise TaskValidationError("name", "Nazwa zadania nie moze byc pusta")
    if "|" in name:
        raise TaskValidationError("name", "Nazwa zadania nie moze zawierac znaku '|'")
    if any(ch in name for ch in LINE_BREAKS):
        raise TaskValidationError("name", "Nazwa zadania nie moze zawierac znaku nowej linii")


def _check_date(field_name: str, value) -> None:
    if value is None:
        raise TaskValidationError(field_name, "Brak wymaganej daty")
    if not isinstance(value, date):
        raise TaskValidationError(field_name, f"Oczekiwano daty, otrzymano {type(value).__name__}")


def normalize_keyword(keyword) -> str:
    if not isinstance(keyword, str) or not keyword.strip():
        raise TaskValidationError("keyword", "Slowo kluczowe nie moze byc puste")
    return keyword.strip().casefold()


@dataclass
class Task(ABC):
    """
    Model domenowy pojedynczego zadania. Typ zadania wynika z klasy
    (Todo / Deadline / Event), a każdy wariant niesie tylko swoje daty.
    Jedyny stan zmienny to `done`.
    """
    name: str
    done: bool = field(default=False, kw_only=True)

    kind: ClassVar[TaskKind]

    def __post_init__(self) -> None:
        _check_name(self.name)

    def mark_done(self) -> None:
        self.done = True

    def mark_not_done(self) -> None:
        self.done = False

    @abstractmethod
    def occurs_on(self, day: date) -> bool:
        """Czy zadanie przypada na dany dzień."""

    def matches(self, keyword: str) -> bool:
        """Dosłowne dopasowanie fragmentu nazwy, bez rozróżniania wielkości liter."""
        return normalize_keyword(keyword) in self.name.casefold()

    @property
    def done_icon(self) -> str:
        return "[X]" if self.done else "[ ]"

    def _display_suffix(self) -> str:
        return ""

    def _record_dates(self) -> list[str]:
        return []

    def __str__(self) -> str:
        return f"{self.kind.tag}{self.done_icon} {self.name}{self._display_suffix()}"

    def to_record(self) -> str:
        """Linia rekordu: `kind | 0/1 | name [| date] [| end]`."""
        fields = [self.kind.value, "1" if self.done else "0", self.name, *self._record_dates()]
        return RECORD_SEPARATOR.join(fields)


@dataclass
class Todo(Task):
    kind: ClassVar[TaskKind] = TaskKind.TODO

    def occurs_on(self, day: date) -> bool:
        return False


@dataclass
class Deadline(Task):
    due: date
    kind: ClassVar[TaskKind] = TaskKind.DEADLINE

    def __post_init__(self) -> None:
        super().__post_init__()
        _check_date("due", self.due)

    def occurs_on(self, day: date) -> bool:
        return self.due == day

    def _display_suffix(self) -> str:
        return f" (by: {format_display_date(self.due)})"

    def _record_dates(self) -> list[str]:
        return [format_record_date(self.due)]


@dataclass
class Event(Task):
    """Wydarzenie w zakresie dat; oba końce zakresu się wliczają."""
    start: date
    end: date
    kind: ClassVar[TaskKind] = TaskKind.EVENT

    def __post_init__(self) -> None:
        super().__post_init__()
        _check_date("start", self.start)
        _check_date("end", self.end)
        if self.end < self.start:
            raise TaskValidationError(
                "end",
                f"Koniec wydarzenia ({format_record_date(self.end)}) jest przed poczatkiem ({format_record_date(self.start)})",
            )

    def occurs_on(self, day: date) -> bool:
        return self.start <= day <= self.end

    def _display_suffix(self) -> str:
        return f" (from: {format_display_date(self.start)} to: {format_display_date(self.end)})"

    def _record_dates(self) -> list[str]:
        return [format_record_date(self.start), format_record_date(self.end)]


def create_task(
    name: str,
    kind: TaskKind,
    date: date | None = None,
    end_date: date | None = None,
) -> Task:
    """
        Tworzy zadanie danego typu z wymaganymi dla niego datami.

        - `name` jest przycinana z białych znaków i nie może być pusta.
        - Todo: bez dat. Deadline: `date`. Event: `date` i `end_date`, przy czym `end_date >= date`.
        - Daty, których typ nie przyjmuje, są błędem (a nie są po cichu ignorowane).

        :param name: Nazwa zadania.
        :param kind: Typ zadania.
        :param date: Termin (Deadline) albo początek (Event).
        :param end_date: Koniec (Event).
        :raises TaskValidationError: Gdy dane nie spełniają reguł typu.
        :return: Nowy obiekt `Task` (nieoznaczony jako wykonany).
    """
    if not isinstance(name, str) or not name.strip():
        raise TaskValidationError("name", "Nazwa zadania nie moze byc pusta")
    name = name.strip()
    try:
        kind = TaskKind(kind)
    except ValueError:
        raise TaskValidationError("kind", f"Nieznany typ zadania: {kind!r}")

    match kind:
        case TaskKind.TODO:
            if date is not None or end_date is not None:
                raise TaskValidationError("date", "Zadanie typu todo nie ma daty")
            return Todo(name)
        case TaskKind.DEADLINE:
            if end_date is not None:
                raise TaskValidationError("end_date", "Deadline ma tylko jedna date")
            return Deadline(name, date)
        case TaskKind.EVENT:
            return Event(name, date, end_date)
