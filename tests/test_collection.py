import pytest
from datetime import date
from taskbook.domain.collection import TaskCollection
from taskbook.domain.errors import TaskIndexError, TaskValidationError
from taskbook.domain.task import Todo, Deadline, Event


def make_collection(*names: str) -> TaskCollection:
    return TaskCollection(Todo(n) for n in names)


def test_add_returns_new_count():
    tasks = TaskCollection()
    assert tasks.add(Todo("a")) == 1
    assert tasks.add(Todo("b")) == 2
    assert tasks.size() == len(tasks) == 2


@pytest.mark.parametrize("position", [1, 2, 3, 4])
def test_remove_renumbers_following_tasks(position):
    # Arrange
    tasks = make_collection("a", "b", "c", "d")
    before = [t.name for t in tasks]

    # Act
    removed = tasks.remove_at(position)

    # Assert
    assert removed.name == before[position - 1]
    assert tasks.size() == 3
    expected = before[: position - 1] + before[position:]
    assert [(p, t.name) for p, t in tasks.all()] == list(enumerate(expected, start=1))


@pytest.mark.parametrize("position", [0, -1, 4, 5])
def test_remove_out_of_range_leaves_collection_unchanged(position):
    tasks = make_collection("a", "b", "c")

    with pytest.raises(TaskIndexError) as exc:
        tasks.remove_at(position)

    assert isinstance(exc.value, IndexError)
    assert exc.value.size == 3
    assert [t.name for t in tasks] == ["a", "b", "c"]


def test_index_error_on_empty_collection():
    with pytest.raises(TaskIndexError) as exc:
        TaskCollection().mark_at(1, True)
    assert "pusta" in str(exc.value)


def test_mark_at_sets_and_clears_done():
    tasks = make_collection("a", "b")

    tasks.mark_at(2, True)
    assert tasks.get(2).done is True
    assert tasks.get(1).done is False

    tasks.mark_at(2, False)
    assert tasks.get(2).done is False


def test_mark_at_rejects_non_integer_position():
    tasks = make_collection("a")
    with pytest.raises(TaskIndexError):
        tasks.mark_at("1", True)


def test_all_is_restartable():
    tasks = make_collection("a", "b")
    first = list(tasks.all())
    second = list(tasks.all())
    assert first == second
    assert [p for p, _ in first] == [1, 2]


def test_on_date_keeps_positions():
    tasks = TaskCollection([
        Todo("read book"),
        Deadline("submit report", date(2024, 1, 3)),
        Event("trip", date(2024, 1, 1), date(2024, 1, 5)),
        Deadline("pay rent", date(2024, 2, 1)),
    ])

    hits = [(p, t.name) for p, t in tasks.on_date(date(2024, 1, 3))]

    assert hits == [(2, "submit report"), (3, "trip")]


def test_find_matches_keyword():
    tasks = make_collection("read book", "return book", "buy milk")
    assert [p for p, _ in tasks.find("BOOK")] == [1, 2]
    assert tasks.find("bread") == []


def test_find_rejects_blank_keyword_even_when_empty():
    with pytest.raises(TaskValidationError):
        TaskCollection().find("")
