from __future__ import annotations
from datetime import date
from typing import Iterable, Iterator
from taskbook.domain.task import Task, normalize_keyword
from taskbook.domain.errors import TaskIndexError


class TaskCollection:
    """
    Uporządkowana lista zadań; kolejność dodania jest zachowana, a użytkownik
    adresuje zadania pozycją 1-based. Po usunięciu pozycje są od razu
    przenumerowane (bez dziur).

    Nie jest bezpieczna przy równoczesnej modyfikacji z wielu wątków —
    wywołujący musi zapewnić własną synchronizację.

    :param initial: Opcjonalne zadania startowe (np. wczytane z magazynu).
    """
    def __init__(self, initial: Iterable[Task] | None = None) -> None:
        self._tasks: list[Task] = list(initial or [])

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def size(self) -> int:
        return len(self._tasks)

    def _index(self, position: int) -> int:
        if isinstance(position, bool) or not isinstance(position, int):
            raise TaskIndexError(position, len(self._tasks))
        if position < 1 or position > len(self._tasks):
            raise TaskIndexError(position, len(self._tasks))
        return position - 1

    def add(self, task: Task) -> int:
        """Dopisuje zadanie na końcu; zwraca nową liczbę zadań."""
        self._tasks.append(task)
        return len(self._tasks)

    def get(self, position: int) -> Task:
        return self._tasks[self._index(position)]

    def remove_at(self, position: int) -> Task:
        """
            Usuwa zadanie z podanej pozycji i zwraca je.

            :raises TaskIndexError: Gdy `position` jest poza `[1, size]`.
        """
        return self._tasks.pop(self._index(position))

    def mark_at(self, position: int, done: bool) -> Task:
        """
            Ustawia stan wykonania zadania na podanej pozycji.

            :raises TaskIndexError: Gdy `position` jest poza `[1, size]`.
            :return: Zmienione zadanie.
        """
        task = self._tasks[self._index(position)]
        if done:
            task.mark_done()
        else:
            task.mark_not_done()
        return task

    def all(self) -> Iterator[tuple[int, Task]]:
        """Pary (pozycja, zadanie) w kolejności przechowywania; każde wywołanie zaczyna od nowa."""
        for position, task in enumerate(self._tasks, start=1):
            yield position, task

    def on_date(self, day: date) -> Iterator[tuple[int, Task]]:
        return ((p, t) for p, t in self.all() if t.occurs_on(day))

    def find(self, keyword: str) -> list[tuple[int, Task]]:
        """Zadania, których nazwa zawiera `keyword` (bez rozróżniania wielkości liter)."""
        keyword = normalize_keyword(keyword)
        return [(p, t) for p, t in self.all() if t.matches(keyword)]

    def replace_all(self, tasks: Iterable[Task]) -> None:
        self._tasks = list(tasks)
