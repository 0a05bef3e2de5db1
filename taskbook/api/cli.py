from taskbook.domain.errors import ParseError, PersistenceError, TaskIndexError, TaskValidationError, UnknownCommandError
from taskbook.domain.records import PersistenceWarning
from taskbook.domain.dates import parse_date
from taskbook.services.task_service import TaskService
from taskbook.services.commands import CommandResult, Instruction
from taskbook.adapters.memory.task_storage import InMemoryTaskStorage
from taskbook.adapters.text.task_storage import TextFileTaskStorage
from taskbook.adapters.sql.task_storage import SqlTaskStorage
from taskbook.api.parser import parse_line
from taskbook.api.colors import TaskColor, KIND_COLORS
from taskbook.logging_setup import setup_logging
from typer import Argument, BadParameter, Exit, Option, Typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.panel import Panel
from pathlib import Path
from typing import Iterator, Optional
import logging


### COMMENTS
# ==========================================================
# CLI (Typer + Rich) — warstwa prezentacji dla listy zadań.
# ==========================================================
# Rola:
# - Zamienia argumenty komend na `Instruction` i przekazuje je do TaskService.
# - Wyświetla `CommandResult` (panele, tabela) i ostrzeżenia z wczytywania.
#
# Zasady:
# - Zero logiki biznesowej — deleguj do TaskService.
# - Bootstrap zależności (magazyn + serwis + logowanie) w callbacku.
# - Nieudane polecenie jednorazowe kończy proces kodem 1.


app = Typer(help="Taskbook — lista zadań: todo, deadline, event")
console = Console()

service: TaskService | None = None  # ustawimy w callbacku


def build_service(file: Optional[Path], db_path: Optional[Path]) -> TaskService:
    """Tworzy serwis na bazie wybranego adaptera.
    - Brak opcji -> InMemory (tylko ta sesja)
    - --file -> plik tekstowy z rekordami
    - --db -> SQLite przez SQLAlchemy
    """
    if file and db_path:
        raise BadParameter("Podaj --file albo --db, nie oba naraz.")
    if file:
        storage = TextFileTaskStorage(file)
    elif db_path:
        storage = SqlTaskStorage(db_path)
    else:
        storage = InMemoryTaskStorage()
    return TaskService(storage)


@app.callback()
def main(
    file: Optional[Path] = Option(
        None,
        "--file",
        "-f",
        envvar="TASKBOOK_FILE",
        help="Ścieżka do pliku z rekordami zadań (włącza tryb trwały)",
    ),
    db_path: Optional[Path] = Option(
        None,
        "--db",
        envvar="TASKBOOK_DB",
        help="Ścieżka do bazy SQLite (alternatywa dla --file)",
    ),
    verbose: bool = Option(False, "--verbose", "-v", help="Logi DEBUG na stderr"),
    log_file: Optional[Path] = Option(
        None,
        "--log-file",
        envvar="TASKBOOK_LOG_FILE",
        help="Dodatkowy plik z pełnymi logami",
    ),
) -> None:
    """Bootstrap zależności na starcie procesu CLI."""
    global service
    setup_logging(
        console_level=logging.DEBUG if verbose else logging.WARNING,
        log_file=log_file,
    )
    try:
        service = build_service(file, db_path)
        warnings = service.start()
    except PersistenceError as e:
        console.print(Panel.fit(
            f"❌ {escape(str(e))}\n[dim]Start z pustą listą.[/]",
            title="Błąd odczytu",
            border_style="red",
        ))
        service = TaskService(InMemoryTaskStorage())
        return
    render_warnings(warnings)


def render_warnings(warnings: list[PersistenceWarning]) -> None:
    """Jeden zbiorczy panel dla wszystkich pominiętych rekordów."""
    if not warnings:
        return
    lines = [f"⚠️ Pominięto uszkodzone rekordy: {len(warnings)}"]
    lines += [f"[dim]{escape(str(w))}[/]" for w in warnings]
    console.print(Panel.fit("\n".join(lines), title="Ostrzeżenie", border_style="yellow"))


def render_list(result: CommandResult) -> None:
    """Renderuje tabelę Rich z kolumnami: #, Typ, Zadanie + stopka z liczbą zadań."""
    table = Table(show_lines=False, header_style="bold")
    table.add_column("#", no_wrap=True, style="cyan", justify="right")
    table.add_column("Typ", no_wrap=True)
    table.add_column("Zadanie")

    for position, task in result.tasks:
        color = KIND_COLORS[task.kind]
        table.add_row(
            str(position),
            f"{color}{task.kind.name.lower()}{TaskColor.RESET}",
            escape(str(task)),
        )

    console.print(escape(result.message))
    if result.tasks:
        console.print(table)
    console.print(f"[dim]Razem: {result.count}[/dim]")


def render_failure(result: CommandResult) -> None:
    match result.error:
        case TaskValidationError():
            title, hint = "Błąd walidacji", "Podpowiedź: taskbook --help"
        case TaskIndexError():
            title, hint = "Nie znaleziono", "Użyj 'list', żeby znaleźć poprawny numer"
        case ParseError() | UnknownCommandError():
            title, hint = "Nie rozumiem", "Polecenia: todo, deadline, event, mark, unmark, delete, list, find, bye"
        case PersistenceError():
            title, hint = "Błąd zapisu", None
        case _:
            title, hint = "Błąd domenowy", None
    body = f"❌ {escape(result.message)}"
    if hint:
        body += f"\n[dim]{escape(hint)}[/]"
    console.print(Panel.fit(body, title=title, border_style="red"))


def render_result(result: CommandResult) -> None:
    if not result.ok:
        render_failure(result)
    elif result.is_exit:
        console.print(Panel.fit(f"👋 {escape(result.message)}", border_style="cyan"))
    elif result.listing:
        render_list(result)
    else:
        console.print(Panel.fit(f"✅ {escape(result.message)}", title="Sukces", border_style="green"))


def run_one(instruction: Instruction) -> None:
    """Wykonuje jedną instrukcję; przy błędzie kończy proces kodem 1."""
    result = service.dispatch(instruction)
    render_result(result)
    if not result.ok:
        raise Exit(code=1)


def _date_arg(text: str):
    try:
        return parse_date(text)
    except ParseError as e:
        render_failure(CommandResult.failure(e))
        raise Exit(code=1)


@app.command("todo")
def todo(name: str = Argument(..., help="Nazwa zadania")) -> None:
    """Dodaje zadanie bez daty."""
    run_one(Instruction("add-todo", (name,)))


@app.command("deadline")
def deadline(
    name: str = Argument(..., help="Nazwa zadania"),
    by: str = Option(..., "--by", help="Termin, yyyy-MM-dd"),
) -> None:
    """Dodaje zadanie z terminem."""
    run_one(Instruction("add-deadline", (name, _date_arg(by))))


@app.command("event")
def event(
    name: str = Argument(..., help="Nazwa wydarzenia"),
    start: str = Option(..., "--from", help="Początek, yyyy-MM-dd"),
    end: str = Option(..., "--to", help="Koniec (włącznie), yyyy-MM-dd"),
) -> None:
    """Dodaje wydarzenie w zakresie dat."""
    run_one(Instruction("add-event", (name, _date_arg(start), _date_arg(end))))


@app.command("mark")
def mark(position: int = Argument(..., help="Numer zadania z 'list'")) -> None:
    """Oznacza zadanie jako wykonane."""
    run_one(Instruction("mark", (position,)))


@app.command("unmark")
def unmark(position: int = Argument(..., help="Numer zadania z 'list'")) -> None:
    """Oznacza zadanie jako niewykonane."""
    run_one(Instruction("unmark", (position,)))


@app.command("delete")
def delete(position: int = Argument(..., help="Numer zadania z 'list'")) -> None:
    """Usuwa zadanie; kolejne zadania przesuwają się o jedną pozycję."""
    run_one(Instruction("delete", (position,)))


@app.command("list")
def list_cmd(
    on: Optional[str] = Option(None, "--on", help="Tylko zadania przypadające na ten dzień, yyyy-MM-dd"),
) -> None:
    """Listuje zadania (wszystkie albo z danego dnia)."""
    if on is None:
        run_one(Instruction("list"))
    else:
        run_one(Instruction("list-on", (_date_arg(on),)))


@app.command("find")
def find(keyword: str = Argument(..., help="Fragment nazwy")) -> None:
    """Szuka zadań po fragmencie nazwy."""
    run_one(Instruction("find", (keyword,)))


def _read_instructions() -> Iterator[Instruction]:
    while True:
        try:
            line = console.input("[bold cyan]> [/]")
        except EOFError:
            return
        if not line.strip():
            continue
        try:
            yield parse_line(line)
        except ParseError as e:
            render_failure(CommandResult.failure(e))


@app.command("shell")
def shell() -> None:
    """
    Tryb interaktywny: polecenia wpisywane linia po linii, aż do 'bye'.

    Przykłady:
    - todo read book
    - deadline submit report /by 2024-03-01
    - event trip /from 2024-01-01 /to 2024-01-05
    - mark 2, list, list 2024-01-03, find book, bye
    """
    console.print(Panel.fit("📋 Taskbook — wpisz polecenie ('bye' kończy)", border_style="cyan"))
    for result in service.run(_read_instructions()):
        render_result(result)


if __name__ == "__main__":
    app()
