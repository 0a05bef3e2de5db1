from pathlib import Path
from typing import Iterable
import logging
import os
from taskbook.domain.task import Task
from taskbook.domain.records import LoadResult, load_records
from taskbook.domain.errors import PersistenceError

logger = logging.getLogger(__name__)


class TextFileTaskStorage:
    def __init__(self, path: Path) -> None:
        """Inicjalizuje magazyn w pliku tekstowym (jeden rekord na linię).
        Tworzy katalog nadrzędny dla pliku, jeśli nie istnieje."""
        self.path = Path(path)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(f"{self.path.parent}: {e}")

    def load(self) -> LoadResult:
        """Wczytuje plik; brak pliku oznacza pustą listę."""
        try:
            with self.path.open("r", encoding="utf-8", errors="surrogateescape") as f:
                result = load_records(f, source=self.path.name)
        except FileNotFoundError:
            logger.info("Brak pliku %s, start z pusta lista", self.path)
            return LoadResult()
        except OSError as e:
            logger.error("Nie mozna odczytac %s: %s", self.path, e)
            raise PersistenceError(f"{self.path}: {e}")
        logger.debug("Wczytano %d zadan z %s", len(result.tasks), self.path)
        return result

    def save(self, tasks: Iterable[Task]) -> None:
        """Zapis atomowy: plik tymczasowy `.swap`, fsync, potem podmiana."""
        tmp = self.path.with_suffix(self.path.suffix + ".swap")
        try:
            with tmp.open("w", encoding="utf-8", newline="\n") as f:
                for t in tasks:
                    f.write(t.to_record())
                    f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except OSError as e:
            try:
                if tmp.exists():
                    tmp.unlink()
            except OSError:
                pass
            logger.error("Nie mozna zapisac %s: %s", self.path, e)
            raise PersistenceError(f"{self.path}: {e}")
