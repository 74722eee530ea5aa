"""Integration tests for the write-through CartStore."""

from storefront.application.cart_store import CartStore
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeCartStorage, sample_products

RUNNER, CLASSIC, CANVAS = sample_products()


def _snapshot(store: CartStore) -> list[tuple]:
    return [(l.key, l.quantity, l.selected, l.price) for l in store.lines]


class TestPersistence:

    def test_reopen_reproduces_cart(self):
        storage = FakeCartStorage()
        store = CartStore.open(storage, "sess-1")
        store.add_line(RUNNER, 2, "41")
        store.add_line(CLASSIC, 1, "39")
        store.toggle_select("p2", "39")

        reopened = CartStore.open(storage, "sess-1")
        assert [(l.key, l.quantity, l.selected) for l in reopened.lines] == [
            (("p1", "41"), 2, True),
            (("p2", "39"), 1, False),
        ]

    def test_every_mutation_is_written(self):
        storage = FakeCartStorage()
        store = CartStore.open(storage, "sess-1")
        store.add_line(RUNNER, 1, "41")
        store.update_quantity("p1", "41", 4)
        store.toggle_select_all()
        store.remove_line("p1", "41")
        assert storage.saves == 4
        assert CartStore.open(storage, "sess-1").lines == []

    def test_reopen_matches_memory_after_each_operation(self):
        storage = FakeCartStorage()
        store = CartStore.open(storage, "sess-1")
        operations = [
            lambda: store.add_line(RUNNER, 2, "41"),
            lambda: store.add_line(CLASSIC, 1, "39"),
            lambda: store.update_quantity("p1", "41", 5),
            lambda: store.toggle_select("p2", "39"),
            lambda: store.remove_line("p1", "41"),
            lambda: store.toggle_select("p2", "39"),
        ]
        for operation in operations:
            operation()
            reopened = CartStore.open(storage, "sess-1")
            assert _snapshot(reopened) == _snapshot(store)

    def test_sessions_are_isolated(self):
        storage = FakeCartStorage()
        CartStore.open(storage, "a").add_line(RUNNER, 1, "41")
        assert CartStore.open(storage, "b").lines == []

    def test_unknown_session_starts_empty(self):
        store = CartStore.open(FakeCartStorage(), "new")
        assert store.lines == []
        assert store.totals().all.count == 0


class TestStorageFailures:

    def test_unreadable_storage_starts_empty(self):
        store = CartStore.open(FakeCartStorage(failing=True), "sess-1")
        assert store.lines == []

    def test_write_failures_are_not_fatal(self):
        store = CartStore.open(FakeCartStorage(failing=True), "sess-1")
        store.add_line(RUNNER, 2, "41")
        store.add_line(CANVAS)
        assert store.totals().all.total == Money.of(52500)


class TestCartOperations:

    def test_clear_selected(self):
        storage = FakeCartStorage()
        store = CartStore.open(storage, "sess-1")
        store.add_line(RUNNER, 1, "41")
        store.add_line(CLASSIC, 1, "39")
        store.toggle_select("p1", "41")
        store.clear_selected()
        assert [l.key for l in CartStore.open(storage, "sess-1").lines] == [("p1", "41")]

    def test_selected_totals(self):
        store = CartStore.open(FakeCartStorage(), "sess-1")
        store.add_line(RUNNER, 2, "41")
        store.add_line(CLASSIC, 1, "39")
        store.toggle_select("p1", "41")
        totals = store.totals()
        assert totals.selected.total == Money.of(15000)
        assert totals.all.total == Money.of(55000)
        assert not store.all_selected
