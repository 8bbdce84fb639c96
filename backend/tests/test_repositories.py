"""Contract tests run against every MovieStore implementation."""
import pytest
from sqlalchemy.exc import OperationalError

from domain.entities import Movie
from exceptions import DatabaseError, InternalError
from repositories.movie_repository import SqlMovieRepository


def _movie(n: int) -> Movie:
    return Movie(title=f"Movie {n}", genre="Drama", duration_minutes=90 + n)


def test_insert_assigns_identity(store):
    stored = store.insert(_movie(1))

    assert stored.id is not None
    assert stored.created_at is not None
    assert store.find_by_id(stored.id) == stored


def test_find_missing_returns_none(store):
    assert store.find_by_id(999) is None


def test_ids_are_monotonic_and_never_reused(store):
    first = store.insert(_movie(1))
    second = store.insert(_movie(2))
    assert store.delete(second.id)

    third = store.insert(_movie(3))

    assert first.id < second.id < third.id


def test_find_page_uses_insertion_order(store):
    ids = [store.insert(_movie(n)).id for n in range(5)]

    page_one, total = store.find_page(1, 2)
    page_three, _ = store.find_page(3, 2)
    beyond, total_beyond = store.find_page(4, 2)

    assert total == 5
    assert [m.id for m in page_one] == ids[:2]
    assert [m.id for m in page_three] == ids[4:]
    assert beyond == []
    assert total_beyond == 5


def test_replace_preserves_identity(store):
    stored = store.insert(_movie(1))
    replacement = Movie(id=42, title="Other", genre="Comedy", duration_minutes=80)

    assert store.replace(stored.id, replacement)

    reloaded = store.find_by_id(stored.id)
    assert reloaded.id == stored.id
    assert reloaded.created_at == stored.created_at
    assert (reloaded.title, reloaded.genre, reloaded.duration_minutes) == ("Other", "Comedy", 80)
    assert store.find_by_id(42) is None


def test_replace_keeps_position_in_order(store):
    first = store.insert(_movie(1))
    second = store.insert(_movie(2))
    store.replace(first.id, _movie(9))

    page, _ = store.find_page(1, 10)

    assert [m.id for m in page] == [first.id, second.id]


def test_replace_missing_returns_false(store):
    assert store.replace(999, _movie(1)) is False


def test_delete(store):
    stored = store.insert(_movie(1))

    assert store.delete(stored.id) is True
    assert store.find_by_id(stored.id) is None
    assert store.delete(stored.id) is False


def test_sql_failures_surface_as_database_error(db_session, monkeypatch):
    repo = SqlMovieRepository(db_session)

    def broken_get(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db_session, "get", broken_get)

    with pytest.raises(DatabaseError) as exc_info:
        repo.find_by_id(1)
    assert isinstance(exc_info.value, InternalError)
    assert exc_info.value.details == {"operation": "find_by_id"}


@pytest.mark.parametrize("movie_id", [0, -1, 2 ** 63, 10 ** 20])
def test_ids_outside_column_range_are_missing(store, movie_id):
    store.insert(_movie(1))

    assert store.find_by_id(movie_id) is None
    assert store.replace(movie_id, _movie(2)) is False
    assert store.delete(movie_id) is False


def test_find_page_far_past_the_end(store):
    store.insert(_movie(1))

    assert store.find_page(10 ** 17, 100) == ([], 1)
