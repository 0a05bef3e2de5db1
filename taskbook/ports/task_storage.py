from typing import Protocol, Iterable
from taskbook.domain.task import Task
from taskbook.domain.records import LoadResult


### COMMENTS
# ==========================================================
# Kontrakt magazynu zadań (ports/task_storage.py).
# ==========================================================
# - Magazyn zna tylko uporządkowaną sekwencję rekordów; nie wie nic o pozycjach,
#   poleceniach ani walidacji (to domena i serwis).
# - Adaptery mapują błędy technologiczne na `PersistenceError`.
# - Uszkodzone rekordy przy wczytywaniu nie przerywają `load()` — trafiają do
#   `LoadResult.warnings`.


class TaskStorage(Protocol):
    """Interfejs trwałości dla listy zadań.

    Adaptery (implementacje) muszą:
    - zachować kolejność zadań między `save()` a `load()`,
    - przy `save()` nadpisać całość: dokładnie jeden rekord na zadanie,
    - mapować błędy technologiczne na `PersistenceError`.
    """

    def load(self) -> LoadResult:
        """Wczytuje wszystkie rekordy w kolejności zapisu.

        Zwraca:
            LoadResult: Poprawnie odczytane zadania i ostrzeżenia o pominiętych liniach.

        Wyjątki domenowe:
            PersistenceError: Gdy magazyn istnieje, ale nie da się go odczytać.

        Uwagi:
            Brak magazynu (np. brak pliku) to pusta lista, nie błąd.
        """

    def save(self, tasks: Iterable[Task]) -> None:
        """Nadpisuje magazyn bieżącą listą zadań.

        Wyjątki domenowe:
            PersistenceError: Gdy zapis się nie powiódł.

        Uwagi:
            Operacja powinna być atomowa (poprzednia zawartość zostaje przy błędzie).
        """
