from typing import Iterable
from taskbook.domain.task import Task
from taskbook.domain.records import LoadResult, load_records

### COMMENTS
# ==========================================================
# Adapter pamięciowy magazynu zadań (adapters/memory/task_storage.py).
# ==========================================================
# - Trzyma linie rekordów w liście `lines` (ten sam format co plik tekstowy),
#   więc testy sprawdzają prawdziwe kodowanie, a nie kopie obiektów.
# - Brak trwałości między uruchomieniami; używany w testach i gdy nie podano pliku.


class InMemoryTaskStorage:
    """
        Magazyn w pamięci z opcjonalnymi liniami startowymi.
        :param lines: Iterable z liniami rekordów do wstępnego załadowania.
    """
    def __init__(self, lines: Iterable[str] | None = None) -> None:
        self.lines: list[str] = list(lines or [])
        self.saves = 0

    def load(self) -> LoadResult:
        return load_records(self.lines, source="memory")

    def save(self, tasks: Iterable[Task]) -> None:
        """Zastępuje wszystkie linie rekordami bieżących zadań; zlicza zapisy."""
        self.lines = [t.to_record() for t in tasks]
        self.saves += 1
