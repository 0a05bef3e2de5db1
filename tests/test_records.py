import logging
import pytest
from datetime import date
from taskbook.domain.enums import TaskKind
from taskbook.domain.errors import ParseError
from taskbook.domain.records import load_records, parse_record
from taskbook.domain.task import Todo, Deadline, Event, create_task
from taskbook.services.commands import Instruction


@pytest.mark.parametrize(
    "name, kind, dates",
    [
        ("read book", TaskKind.TODO, ()),
        ("submit report", TaskKind.DEADLINE, (date(2024, 3, 1),)),
        ("trip", TaskKind.EVENT, (date(2024, 1, 1), date(2024, 1, 5))),
    ],
)
def test_record_round_trip(name, kind, dates):
    task = create_task(name, kind, *dates)
    task.mark_done()

    assert parse_record(task.to_record()) == task


def test_parse_record_restores_done_flag():
    assert parse_record("T | 1 | read book") == Todo("read book", done=True)
    assert parse_record("D | 0 | submit report | 2024-03-01") == Deadline("submit report", date(2024, 3, 1))


@pytest.mark.parametrize(
    "line",
    [
        "T | 0",                                   # za mało pól
        "X | 0 | what",                            # nieznany typ
        "T | 2 | read book",                       # zła flaga
        "T | 0 | read book | 2024-01-01",          # todo z datą
        "D | 0 | submit report",                   # deadline bez daty
        "D | 0 | submit report | 01/03/2024",      # zła data
        "E | 0 | trip | 2024-01-01",               # event bez końca
        "E | 0 | trip | 2024-01-05 | 2024-01-01",  # odwrócony zakres
        "T | 0 |  ",                               # pusta nazwa
    ],
)
def test_parse_record_rejects_malformed(line):
    with pytest.raises(ParseError):
        parse_record(line)


def test_load_skips_corrupt_line_and_keeps_the_rest(caplog):
    lines = [
        "T | 0 | read book\n",
        "D | 1 | submit report | 2024-13-45\n",
        "D | 1 | submit report | 2024-03-01\n",
        "\n",
        "E | 0 | trip | 2024-01-01 | 2024-01-05\n",
    ]

    with caplog.at_level(logging.WARNING, logger="taskbook.domain.records"):
        result = load_records(lines, source="tasks.txt")

    assert result.tasks == [
        Todo("read book"),
        Deadline("submit report", date(2024, 3, 1), done=True),
        Event("trip", date(2024, 1, 1), date(2024, 1, 5)),
    ]
    assert len(result.warnings) == 1
    warning = result.warnings[0]
    assert warning.lineno == 2
    assert warning.source == "tasks.txt"
    assert "2024-13-45" in warning.line
    assert "tasks.txt:2" in caplog.text


def test_load_empty_input():
    result = load_records([])
    assert result.tasks == []
    assert result.warnings == []


def test_multiline_name_cannot_reach_a_record(service, storage):
    # Act
    result = service.dispatch(Instruction("add-todo", ("a\nb",)))

    # Assert
    assert not result.ok
    assert storage.saves == 0
    assert load_records(storage.lines).tasks == []


def test_every_accepted_task_reloads_from_one_line(service, storage):
    service.dispatch(Instruction("add-todo", ("read\tbook",)))
    service.dispatch(Instruction("add-deadline", ("submit report", date(2024, 3, 1))))

    reloaded = load_records(storage.lines)

    assert reloaded.warnings == []
    assert reloaded.tasks == list(service.tasks)
    assert all("\n" not in line for line in storage.lines)


@pytest.mark.parametrize(
    "line",
    [
        "D | 0 | x | 2024-1-5",            # niepełny format daty
        "D | 0 | x |  2024-03-01",         # spacja przed datą
        "E | 0 | x | 2024-01-01 | 2024-1-05",
    ],
)
def test_parse_record_requires_exact_date_format(line):
    with pytest.raises(ParseError):
        parse_record(line)


def test_load_skips_undecodable_line():
    # linia z bajtami spoza UTF-8, odczytana z errors="surrogateescape"
    bad = b"T | 0 | \xff\xfe bad".decode("utf-8", "surrogateescape")
    lines = ["T | 0 | one", bad, "T | 0 | two", "T | 0 | three"]

    result = load_records(lines, source="tasks.txt")

    assert [t.name for t in result.tasks] == ["one", "two", "three"]
    assert len(result.warnings) == 1
    assert result.warnings[0].lineno == 2
    assert "\\udcff" in result.warnings[0].line
    assert "UTF-8" in result.warnings[0].reason
