from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Any, ClassVar
from taskbook.domain.collection import TaskCollection
from taskbook.domain.dates import format_display_date
from taskbook.domain.enums import TaskKind
from taskbook.domain.errors import DomainError, ParseError, TaskValidationError, UnknownCommandError
from taskbook.domain.task import Task, create_task
from taskbook.ports.task_storage import TaskStorage


### COMMENTS
# ==========================================================
# Polecenia (services/commands.py) — jedna klasa na akcję użytkownika.
# ==========================================================
# - Instrukcja z parsera (`Instruction`) → `resolve()` → konkretne polecenie.
# - Polecenie jest jednorazowe: `execute(tasks, storage)` → `CommandResult`.
# - Polecenia zmieniające listę: najpierw walidacja, potem zmiana, na końcu `storage.save`.
#   Błąd walidacji lub pozycji nie rusza listy i nie zapisuje niczego.
# - Listowanie i wyszukiwanie niczego nie zmieniają i nie zapisują.

UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class Instruction:
    """Ustrukturyzowana instrukcja od parsera: nazwa akcji i jej argumenty."""
    action: str
    args: tuple[Any, ...] = ()


@dataclass
class CommandResult:
    """Wynik polecenia dla warstwy prezentacji."""
    message: str
    tasks: list[tuple[int, Task]] = field(default_factory=list)
    count: int | None = None
    is_exit: bool = False
    listing: bool = False
    ok: bool = True
    error: DomainError | None = None

    @classmethod
    def failure(cls, error: DomainError, message: str | None = None) -> CommandResult:
        return cls(message=message or str(error), ok=False, error=error)

    def lines(self) -> list[str]:
        """Linie tekstowe zadań w formacie `N.[T][ ] nazwa`."""
        return [f"{position}.{task}" for position, task in self.tasks]

    def __str__(self):
        parts = [self.message, *(f"  {line}" for line in self.lines())]
        return "\n".join(parts)


class Command(ABC):
    is_exit: ClassVar[bool] = False

    @abstractmethod
    def execute(self, tasks: TaskCollection, storage: TaskStorage) -> CommandResult:
        ...


def _count_text(count: int) -> str:
    return f"Liczba zadan na liscie: {count}."


@dataclass(frozen=True)
class _AddTask(Command):

    @abstractmethod
    def build(self) -> Task:
        ...

    def execute(self, tasks: TaskCollection, storage: TaskStorage) -> CommandResult:
        task = self.build()
        count = tasks.add(task)
        storage.save(tasks)
        return CommandResult(
            message=f"Dodano zadanie:\n  {task}\n{_count_text(count)}",
            tasks=[(count, task)],
            count=count,
        )


@dataclass(frozen=True)
class AddTodo(_AddTask):
    name: str

    def build(self) -> Task:
        return create_task(self.name, TaskKind.TODO)


@dataclass(frozen=True)
class AddDeadline(_AddTask):
    name: str
    due: date

    def build(self) -> Task:
        return create_task(self.name, TaskKind.DEADLINE, self.due)


@dataclass(frozen=True)
class AddEvent(_AddTask):
    name: str
    start: date
    end: date

    def build(self) -> Task:
        return create_task(self.name, TaskKind.EVENT, self.start, self.end)


@dataclass(frozen=True)
class Mark(Command):
    position: int
    done: ClassVar[bool] = True

    def execute(self, tasks: TaskCollection, storage: TaskStorage) -> CommandResult:
        task = tasks.mark_at(self.position, self.done)
        storage.save(tasks)
        header = "Oznaczono jako wykonane:" if self.done else "Oznaczono jako niewykonane:"
        return CommandResult(
            message=f"{header}\n  {task}",
            tasks=[(self.position, task)],
            count=len(tasks),
        )


@dataclass(frozen=True)
class Unmark(Mark):
    done: ClassVar[bool] = False


@dataclass(frozen=True)
class Delete(Command):
    position: int

    def execute(self, tasks: TaskCollection, storage: TaskStorage) -> CommandResult:
        removed = tasks.remove_at(self.position)
        storage.save(tasks)
        count = len(tasks)
        return CommandResult(
            message=f"Usunieto zadanie:\n  {removed}\n{_count_text(count)}",
            tasks=[(self.position, removed)],
            count=count,
        )


@dataclass(frozen=True)
class ListAll(Command):

    def execute(self, tasks: TaskCollection, storage: TaskStorage) -> CommandResult:
        items = list(tasks.all())
        message = "Zadania na liscie:" if items else "Lista jest pusta."
        return CommandResult(message=message, tasks=items, count=len(tasks), listing=True)


@dataclass(frozen=True)
class ListOnDate(Command):
    day: date

    def execute(self, tasks: TaskCollection, storage: TaskStorage) -> CommandResult:
        if not isinstance(self.day, date):
            raise TaskValidationError("date", f"Oczekiwano daty, otrzymano {type(self.day).__name__}")
        items = list(tasks.on_date(self.day))
        when = format_display_date(self.day)
        message = f"Zadania w dniu {when}:" if items else f"Brak zadan w dniu {when}."
        return CommandResult(message=message, tasks=items, count=len(tasks), listing=True)


@dataclass(frozen=True)
class Find(Command):
    keyword: str

    def execute(self, tasks: TaskCollection, storage: TaskStorage) -> CommandResult:
        items = tasks.find(self.keyword)
        message = (
            f"Zadania pasujace do '{self.keyword.strip()}':" if items
            else f"Brak zadan pasujacych do '{self.keyword.strip()}'."
        )
        return CommandResult(message=message, tasks=items, count=len(tasks), listing=True)


@dataclass(frozen=True)
class Exit(Command):
    is_exit: ClassVar[bool] = True

    def execute(self, tasks: TaskCollection, storage: TaskStorage) -> CommandResult:
        return CommandResult(message="Do zobaczenia!", is_exit=True)


COMMANDS: dict[str, type[Command]] = {
    "add-todo": AddTodo,
    "add-deadline": AddDeadline,
    "add-event": AddEvent,
    "mark": Mark,
    "unmark": Unmark,
    "delete": Delete,
    "list": ListAll,
    "list-on": ListOnDate,
    "find": Find,
    "exit": Exit,
}


def resolve(instruction: Instruction) -> Command:
    """
        Zamienia instrukcję na polecenie.

        :raises UnknownCommandError: Dla akcji `unrecognized` i każdej nieznanej akcji.
        :raises ParseError: Gdy liczba argumentów nie pasuje do akcji.
    """
    if instruction.action == UNRECOGNIZED:
        raw = str(instruction.args[0]) if instruction.args else ""
        raise UnknownCommandError(raw)

    command_cls = COMMANDS.get(instruction.action)
    if command_cls is None:
        raise UnknownCommandError(instruction.action)

    try:
        return command_cls(*instruction.args)
    except TypeError:
        raise ParseError(
            " ".join([instruction.action, *map(str, instruction.args)]),
            f"zla liczba argumentow dla '{instruction.action}'",
        )
