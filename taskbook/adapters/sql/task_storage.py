from __future__ import annotations
from typing import Iterable
from pathlib import Path
import logging
import sqlalchemy as db
from sqlalchemy.exc import SQLAlchemyError
from taskbook.domain.task import Task
from taskbook.domain.records import LoadResult, load_records
from taskbook.domain.errors import PersistenceError

logger = logging.getLogger(__name__)


class SqlTaskStorage:
    """
    Magazyn w bazie SQL (SQLAlchemy Core). Każde zadanie to jeden wiersz
    `(position, record)`, gdzie `record` ma ten sam format co linia pliku
    tekstowego, a `position` wyznacza kolejność.
    """
    def __init__(self, url: str | Path) -> None:
        """
        url: np. 'sqlite:///data/tasks.db' lub Path do pliku (zostanie zrobiony URL)
        """
        if isinstance(url, Path):
            try:
                url.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise PersistenceError(f"{url.parent}: {e}")
            db_url = f"sqlite:///{url}"
        else:
            db_url = url

        self.url = db_url
        self.engine = db.create_engine(db_url, future=True)
        self.meta = db.MetaData()

        self.records = db.Table(
            "task_records",
            self.meta,
            db.Column("position", db.Integer, primary_key=True, autoincrement=False),
            db.Column("record", db.String, nullable=False),
        )

        try:
            self.meta.create_all(self.engine)
        except SQLAlchemyError as e:
            raise PersistenceError(f"{db_url}: {e}")

    def load(self) -> LoadResult:
        stmt = db.select(self.records.c.record).order_by(self.records.c.position.asc())
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(stmt).scalars().all()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Nie mozna odczytac %s: %s", self.url, e)
            raise PersistenceError(f"{self.url}: {e}")
        return load_records(rows, source="task_records")

    def save(self, tasks: Iterable[Task]) -> None:
        """Usuwa wszystkie wiersze i wstawia bieżącą listę w jednej transakcji."""
        rows = [{"position": i, "record": t.to_record()} for i, t in enumerate(tasks, start=1)]
        try:
            with self.engine.begin() as conn:
                conn.execute(db.delete(self.records))
                if rows:
                    conn.execute(db.insert(self.records), rows)
        except (SQLAlchemyError, OSError) as e:
            logger.error("Nie mozna zapisac %s: %s", self.url, e)
            raise PersistenceError(f"{self.url}: {e}")
