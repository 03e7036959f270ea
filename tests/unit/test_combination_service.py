"""Unit tests for the combination service."""

import asyncio
import threading

import pytest

from src.services import combination_service
from src.services import (
    CombinationService,
    CombinationServiceError,
    CombinationValidationError,
    PersistenceError,
)


@pytest.fixture
def service(store):
    return CombinationService(store)


def run(coro):
    return asyncio.run(coro)


class TestGenerateAndStore:
    """Tests for generate_and_store."""

    def test_task_example(self, service, store):
        result = run(service.generate_and_store([1, 2, 1], 2))

        assert result.id == 1
        assert result.combination == [
            ["A1", "B1"],
            ["A1", "B2"],
            ["A1", "C1"],
            ["B1", "C1"],
            ["B2", "C1"],
        ]
        assert store.transactions == 1
        assert store.responses[1] == ([1, 2, 1], 2)
        assert set(store.items) == {"A1", "B1", "B2", "C1"}
        assert len(store.combinations) == 5

    def test_length_one(self, service):
        result = run(service.generate_and_store([2, 1], 1))
        assert result.combination == [["A1"], ["A2"], ["B1"]]

    def test_single_group(self, service):
        result = run(service.generate_and_store([3], 1))

        assert result.id == 1
        assert result.combination == [["A1"], ["A2"], ["A3"]]

    def test_three_two_one_count(self, service):
        result = run(service.generate_and_store([3, 2, 1], 2))
        assert len(result.combination) == 11

    def test_length_exceeds_groups_returns_empty(self, service, store):
        result = run(service.generate_and_store([1, 1], 3))

        assert result.id is None
        assert result.combination == []
        assert store.transactions == 0

    def test_zero_size_groups_are_not_counted(self, service, store):
        result = run(service.generate_and_store([1, 0, 1], 3))

        assert result.id is None
        assert result.combination == []
        assert store.transactions == 0

    def test_ids_come_from_store(self, service):
        first = run(service.generate_and_store([1, 1], 1))
        second = run(service.generate_and_store([1, 1], 1))

        assert (first.id, second.id) == (1, 2)
        assert first.combination == second.combination

    def test_items_are_upserted(self, service, store):
        run(service.generate_and_store([2], 1))
        run(service.generate_and_store([3], 1))

        assert set(store.items) == {"A1", "A2", "A3"}

    def test_accepts_tuple_items(self, service, store):
        result = run(service.generate_and_store((1, 1), 2))

        assert result.combination == [["A1", "B1"]]
        assert store.responses[1] == ([1, 1], 2)


class TestValidation:
    """Tests for business rule checks."""

    def test_length_below_one(self, service, store):
        with pytest.raises(CombinationValidationError, match="length must be >= 1"):
            run(service.generate_and_store([1, 2], 0))
        assert store.transactions == 0

    def test_empty_items(self, service):
        with pytest.raises(CombinationValidationError, match="items must be a non-empty array"):
            run(service.generate_and_store([], 2))

    def test_non_list_items(self, service):
        with pytest.raises(CombinationValidationError, match="items must be a non-empty array"):
            run(service.generate_and_store(None, 2))

    def test_length_checked_first(self, service):
        with pytest.raises(CombinationValidationError, match="length must be >= 1"):
            run(service.generate_and_store([], 0))


class TestPersistenceFailures:
    """Tests for rollback and error propagation."""

    @pytest.mark.parametrize("step", ["insert_response", "insert_items", "insert_combinations"])
    def test_failure_rolls_back_everything(self, make_store, step):
        store = make_store(fail_on=step)
        service = CombinationService(store)

        with pytest.raises(PersistenceError) as exc_info:
            run(service.generate_and_store([1, 2, 1], 2))

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert store.rollbacks == 1
        assert store.responses == {}
        assert store.items == {}
        assert store.combinations == {}

    def test_errors_are_distinguishable(self):
        assert issubclass(PersistenceError, CombinationServiceError)
        assert issubclass(CombinationValidationError, CombinationServiceError)
        assert not issubclass(PersistenceError, CombinationValidationError)


class TestCount:
    """Tests for counting without persistence."""

    def test_count(self, service, store):
        response = service.count([3, 0, 2, 1], 2)

        assert response.total_combinations == 11
        assert response.groups == 4
        assert response.non_empty_groups == 3
        assert store.transactions == 0

    def test_count_validates(self, service):
        with pytest.raises(CombinationValidationError):
            service.count([1], 0)


class TestEventLoop:
    """Tests for keeping enumeration off the event loop."""

    def test_enumeration_runs_in_worker_thread(self, service, monkeypatch):
        threads = []
        original = combination_service.generate_valid_combinations

        def recording(groups, length):
            threads.append(threading.get_ident())
            return original(groups, length)

        monkeypatch.setattr(combination_service, "generate_valid_combinations", recording)

        result = run(service.generate_and_store([1, 2, 1], 2))

        assert len(result.combination) == 5
        assert threads and threads[0] != threading.get_ident()
