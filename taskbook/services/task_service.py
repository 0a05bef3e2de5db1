from __future__ import annotations
import logging
from typing import Iterable, Iterator
from taskbook.ports.task_storage import TaskStorage
from taskbook.domain.collection import TaskCollection
from taskbook.domain.errors import DomainError, PersistenceError
from taskbook.domain.records import PersistenceWarning
from taskbook.services.commands import Command, CommandResult, Instruction, resolve

logger = logging.getLogger(__name__)


### COMMENTS
# ==========================================================
# Warstwa serwisowa (services/task_service.py) — granica wykonania poleceń.
# ==========================================================
# Rola:
# - Trzyma jedną `TaskCollection` i wstrzyknięty magazyn (`TaskStorage`).
# - `start()` wczytuje listę z magazynu i zwraca ostrzeżenia o pominiętych rekordach.
# - `dispatch()` rozwiązuje instrukcję na polecenie i je wykonuje.
#
# Zasady:
# - Każdy `DomainError` zamieniany jest tu na nieudany `CommandResult`; dalej nie wychodzi.
# - Błąd zapisu po udanej zmianie: zmiana zostaje w pamięci, polecenie jest raportowane
#   jako nieudane, sesja działa dalej.
# - Jeden wywołujący naraz; brak synchronizacji.


class TaskService:
    """
    Serwis poleceń dla listy zadań.

    :param storage: Implementacja portu TaskStorage.
    :param tasks: Opcjonalna kolekcja (domyślnie pusta).
    """
    def __init__(self, storage: TaskStorage, tasks: TaskCollection | None = None) -> None:
        self.storage = storage
        self.tasks = tasks if tasks is not None else TaskCollection()

    def start(self) -> list[PersistenceWarning]:
        """
            Wczytuje zadania z magazynu do kolekcji.

            - Uszkodzone rekordy są pomijane; ich lista wraca do wywołującego,
            który pokazuje użytkownikowi zbiorcze ostrzeżenie.

            :raises PersistenceError: Gdy magazynu nie da się odczytać (kolekcja pozostaje bez zmian).
            :return: Ostrzeżenia o pominiętych rekordach.
        """
        result = self.storage.load()
        self.tasks.replace_all(result.tasks)
        if result.warnings:
            logger.warning(
                "Wczytano %d zadan, pominieto %d uszkodzonych rekordow",
                len(result.tasks), len(result.warnings),
            )
        else:
            logger.info("Wczytano %d zadan", len(result.tasks))
        return result.warnings

    def execute(self, command: Command) -> CommandResult:
        """Wykonuje polecenie; błędy domenowe zamienia na nieudany wynik."""
        try:
            result = command.execute(self.tasks, self.storage)
        except PersistenceError as e:
            logger.error("Polecenie %r: %s", command, e)
            return CommandResult.failure(
                e, f"{e}\nZmiana obowiazuje tylko w tej sesji (nie zostala zapisana)."
            )
        except DomainError as e:
            logger.info("Polecenie %r odrzucone: %s", command, e)
            return CommandResult.failure(e)
        logger.debug("Wykonano %r", command)
        return result

    def dispatch(self, instruction: Instruction) -> CommandResult:
        try:
            command = resolve(instruction)
        except DomainError as e:
            logger.info("Instrukcja %r odrzucona: %s", instruction, e)
            return CommandResult.failure(e)
        return self.execute(command)

    def run(self, instructions: Iterable[Instruction]) -> Iterator[CommandResult]:
        """Wykonuje instrukcje po kolei, aż do polecenia wyjścia."""
        for instruction in instructions:
            result = self.dispatch(instruction)
            yield result
            if result.is_exit:
                return
