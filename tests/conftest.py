"""Shared fixtures."""

from contextlib import asynccontextmanager

import pytest

from src.generator import combination_key


class FakeStore:
    """In-memory stand-in for CombinationStore with commit/rollback semantics."""

    def __init__(self, fail_on: str = None):
        self.fail_on = fail_on
        self.next_id = 1
        self.responses = {}
        self.items = {}
        self.combinations = {}
        self.transactions = 0
        self.rollbacks = 0

    @asynccontextmanager
    async def transaction(self):
        self.transactions += 1
        pending = {"responses": {}, "items": {}, "combinations": {}}
        try:
            yield pending
        except BaseException:
            self.rollbacks += 1
            raise
        self.responses.update(pending["responses"])
        for code, prefix in pending["items"].items():
            self.items.setdefault(code, prefix)
        self.combinations.update(pending["combinations"])

    def _maybe_fail(self, step):
        if self.fail_on == step:
            raise RuntimeError(f"{step} failed")

    async def insert_response(self, conn, items, length):
        self._maybe_fail("insert_response")
        response_id = self.next_id
        self.next_id += 1
        conn["responses"][response_id] = (list(items), length)
        return response_id

    async def insert_items(self, conn, groups):
        self._maybe_fail("insert_items")
        for prefix, codes in groups.items():
            for code in codes:
                conn["items"].setdefault(code, prefix)

    async def insert_combinations(self, conn, response_id, combinations):
        self._maybe_fail("insert_combinations")
        for combo in combinations:
            conn["combinations"][(response_id, combination_key(combo))] = list(combo)


@pytest.fixture
def make_store():
    return FakeStore


@pytest.fixture
def store():
    return FakeStore()
