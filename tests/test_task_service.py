from datetime import date
import pytest
from taskbook.adapters.memory.task_storage import InMemoryTaskStorage
from taskbook.domain.errors import (
    ParseError, PersistenceError, TaskIndexError, TaskValidationError, UnknownCommandError,
)
from taskbook.services.commands import (
    AddDeadline, AddEvent, AddTodo, Delete, Exit, Instruction, ListAll, Mark, UNRECOGNIZED, resolve,
)
from taskbook.services.task_service import TaskService


def display(result) -> list[str]:
    return [str(task) for _, task in result.tasks]


def test_add_list_mark_scenario(service, storage):
    # Arrange / Act
    added = service.dispatch(Instruction("add-todo", ("read book",)))
    listed = service.dispatch(Instruction("list"))

    # Assert
    assert added.ok
    assert "[T][ ] read book" in added.message
    assert added.count == 1
    assert display(listed) == ["[T][ ] read book"]
    assert listed.count == 1

    # Act
    service.dispatch(Instruction("add-deadline", ("submit report", date(2024, 3, 1))))
    marked = service.dispatch(Instruction("mark", (2,)))
    listed = service.dispatch(Instruction("list"))

    # Assert
    assert marked.ok
    assert listed.lines()[1] == "2.[D][X] submit report (by: Mar 01 2024)"
    assert storage.lines == ["T | 0 | read book", "D | 1 | submit report | 2024-03-01"]


def test_every_mutation_saves_and_queries_do_not(service, storage):
    service.dispatch(Instruction("add-todo", ("a",)))
    service.dispatch(Instruction("add-event", ("trip", date(2024, 1, 1), date(2024, 1, 5))))
    service.dispatch(Instruction("mark", (1,)))
    service.dispatch(Instruction("unmark", (1,)))
    assert storage.saves == 4

    service.dispatch(Instruction("list"))
    service.dispatch(Instruction("list-on", (date(2024, 1, 2),)))
    service.dispatch(Instruction("find", ("trip",)))
    service.dispatch(Instruction("exit"))
    assert storage.saves == 4

    service.dispatch(Instruction("delete", (1,)))
    assert storage.saves == 5
    assert storage.lines == ["E | 0 | trip | 2024-01-01 | 2024-01-05"]


def test_delete_out_of_range_fails_without_change():
    # Arrange
    storage = InMemoryTaskStorage(["T | 0 | a", "T | 0 | b", "T | 1 | c"])
    service = TaskService(storage)
    service.start()

    # Act
    result = service.dispatch(Instruction("delete", (5,)))

    # Assert
    assert not result.ok
    assert isinstance(result.error, TaskIndexError)
    assert "5" in result.message
    assert service.tasks.size() == 3
    assert storage.saves == 0


def test_delete_returns_removed_task(service):
    service.dispatch(Instruction("add-todo", ("a",)))
    service.dispatch(Instruction("add-todo", ("b",)))

    result = service.dispatch(Instruction("delete", (1,)))

    assert display(result) == ["[T][ ] a"]
    assert result.count == 1
    assert [t.name for t in service.tasks] == ["b"]


def test_invalid_add_does_not_mutate_or_save(service, storage):
    result = service.dispatch(Instruction("add-deadline", ("   ", date(2024, 3, 1))))

    assert not result.ok
    assert isinstance(result.error, TaskValidationError)
    assert service.tasks.size() == 0
    assert storage.saves == 0


def test_inverted_event_is_rejected(service):
    result = service.dispatch(Instruction("add-event", ("trip", date(2024, 1, 5), date(2024, 1, 1))))

    assert not result.ok
    assert isinstance(result.error, TaskValidationError)
    assert service.tasks.size() == 0


def test_unrecognized_instruction_is_rejected(service, storage):
    result = service.dispatch(Instruction(UNRECOGNIZED, ("blah blah",)))

    assert not result.ok
    assert isinstance(result.error, UnknownCommandError)
    assert "blah blah" in result.message
    assert storage.saves == 0


def test_unknown_action_is_rejected(service):
    result = service.dispatch(Instruction("fly"))
    assert isinstance(result.error, UnknownCommandError)


def test_wrong_argument_count_is_parse_error(service):
    result = service.dispatch(Instruction("mark"))
    assert isinstance(result.error, ParseError)


def test_save_failure_is_reported_but_state_stays_usable(failing_storage):
    # Arrange
    service = TaskService(failing_storage)
    service.start()

    # Act
    added = service.dispatch(Instruction("add-todo", ("read book",)))
    listed = service.dispatch(Instruction("list"))

    # Assert
    assert not added.ok
    assert isinstance(added.error, PersistenceError)
    assert "tej sesji" in added.message
    assert listed.ok
    assert display(listed) == ["[T][ ] read book"]
    assert failing_storage.attempts == 1


def test_start_loads_and_reports_corrupt_records():
    storage = InMemoryTaskStorage([
        "T | 0 | read book",
        "D | 1 | submit report | 2024-03-01",
        "Q | 0 | ???",
        "E | 0 | trip | 2024-01-01 | 2024-01-05",
    ])
    service = TaskService(storage)

    warnings = service.start()

    assert service.tasks.size() == 3
    assert [w.lineno for w in warnings] == [3]


def test_list_on_date(service):
    service.dispatch(Instruction("add-todo", ("read book",)))
    service.dispatch(Instruction("add-deadline", ("submit report", date(2024, 1, 3))))
    service.dispatch(Instruction("add-event", ("trip", date(2024, 1, 1), date(2024, 1, 5))))

    result = service.dispatch(Instruction("list-on", (date(2024, 1, 3),)))

    assert result.listing
    assert result.lines() == [
        "2.[D][ ] submit report (by: Jan 03 2024)",
        "3.[E][ ] trip (from: Jan 01 2024 to: Jan 05 2024)",
    ]


def test_find_by_keyword(service):
    service.dispatch(Instruction("add-todo", ("read book",)))
    service.dispatch(Instruction("add-todo", ("buy milk",)))

    result = service.dispatch(Instruction("find", ("MILK",)))

    assert result.lines() == ["2.[T][ ] buy milk"]


def test_exit_signals_termination(service):
    result = service.dispatch(Instruction("exit"))
    assert result.ok
    assert result.is_exit


def test_run_stops_at_exit(service):
    instructions = [
        Instruction("add-todo", ("a",)),
        Instruction("exit"),
        Instruction("add-todo", ("b",)),
    ]

    results = list(service.run(instructions))

    assert len(results) == 2
    assert results[-1].is_exit
    assert [t.name for t in service.tasks] == ["a"]


@pytest.mark.parametrize(
    "instruction, expected",
    [
        (Instruction("add-todo", ("a",)), AddTodo("a")),
        (Instruction("add-deadline", ("a", date(2024, 1, 1))), AddDeadline("a", date(2024, 1, 1))),
        (Instruction("add-event", ("a", date(2024, 1, 1), date(2024, 1, 2))), AddEvent("a", date(2024, 1, 1), date(2024, 1, 2))),
        (Instruction("mark", (1,)), Mark(1)),
        (Instruction("delete", (3,)), Delete(3)),
        (Instruction("list"), ListAll()),
        (Instruction("exit"), Exit()),
    ],
)
def test_resolve_maps_actions(instruction, expected):
    assert resolve(instruction) == expected
