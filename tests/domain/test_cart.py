"""Unit tests for the Cart aggregate."""

from storefront.domain.model.cart import Cart
from storefront.domain.model.value_objects import Money
from tests.fakes import sample_products

RUNNER, CLASSIC, CANVAS = sample_products()


class TestAddLine:

    def test_new_line_is_selected(self):
        cart = Cart()
        line = cart.add_line(RUNNER, 1, "41")
        assert line.selected
        assert line.price == Money.of(20000)
        assert cart.lines == [line]

    def test_same_product_and_size_merges(self):
        cart = Cart()
        cart.add_line(RUNNER, 1, "41")
        cart.add_line(RUNNER, 2, "41")
        assert len(cart.lines) == 1
        assert cart.lines[0].quantity == 3

    def test_different_size_is_separate_line(self):
        cart = Cart()
        cart.add_line(RUNNER, 1, "41")
        cart.add_line(RUNNER, 1, "42")
        assert [line.key for line in cart.lines] == [("p1", "41"), ("p1", "42")]

    def test_missing_size_uses_first_listed_size(self):
        cart = Cart()
        line = cart.add_line(RUNNER, 1)
        assert line.size == "40"

    def test_missing_size_merges_with_explicit_default(self):
        cart = Cart()
        cart.add_line(RUNNER, 1, "40")
        cart.add_line(RUNNER, 1)
        assert len(cart.lines) == 1
        assert cart.lines[0].quantity == 2

    def test_product_without_sizes(self):
        cart = Cart()
        line = cart.add_line(CANVAS)
        assert line.size is None
        assert line.key == ("p3", None)

    def test_quantity_below_one_is_clamped(self):
        cart = Cart()
        line = cart.add_line(CLASSIC, 0, "39")
        assert line.quantity == 1


class TestEditing:

    def _setup(self):
        cart = Cart()
        cart.add_line(RUNNER, 2, "41")
        cart.add_line(CLASSIC, 1, "39")
        return cart

    def test_remove_line(self):
        cart = self._setup()
        cart.remove_line("p1", "41")
        assert [line.key for line in cart.lines] == [("p2", "39")]

    def test_remove_unknown_line_is_noop(self):
        cart = self._setup()
        cart.remove_line("p1", "44")
        assert len(cart.lines) == 2

    def test_update_quantity(self):
        cart = self._setup()
        cart.update_quantity("p1", "41", 5)
        assert cart.lines[0].quantity == 5

    def test_update_quantity_to_zero_removes(self):
        cart = self._setup()
        cart.update_quantity("p1", "41", 0)
        assert [line.key for line in cart.lines] == [("p2", "39")]

    def test_toggle_select(self):
        cart = self._setup()
        cart.toggle_select("p2", "39")
        assert [line.selected for line in cart.lines] == [True, False]

    def test_toggle_select_all_selects_when_some_unselected(self):
        cart = self._setup()
        cart.toggle_select("p2", "39")
        cart.toggle_select_all()
        assert cart.all_selected

    def test_toggle_select_all_deselects_when_all_selected(self):
        cart = self._setup()
        cart.toggle_select_all()
        assert not any(line.selected for line in cart.lines)

    def test_double_toggle_select_all_restores_selection(self):
        cart = self._setup()
        cart.toggle_select_all()
        cart.toggle_select_all()
        assert [line.selected for line in cart.lines] == [True, True]

    def test_double_toggle_select_all_restores_deselection(self):
        cart = self._setup()
        cart.toggle_select_all()
        before = [line.selected for line in cart.lines]
        cart.toggle_select_all()
        cart.toggle_select_all()
        assert [line.selected for line in cart.lines] == before == [False, False]

    def test_empty_cart_is_not_all_selected(self):
        assert not Cart().all_selected

    def test_clear_selected_keeps_unselected(self):
        cart = self._setup()
        cart.toggle_select("p1", "41")
        cart.clear_selected()
        assert [line.key for line in cart.lines] == [("p1", "41")]

    def test_remove_lines_by_key(self):
        cart = self._setup()
        cart.remove_lines({("p2", "39")})
        assert [line.key for line in cart.lines] == [("p1", "41")]

    def test_lines_is_a_copy(self):
        cart = self._setup()
        cart.lines.clear()
        assert len(cart.lines) == 2


class TestTotals:

    def test_all_and_selected(self):
        cart = Cart()
        cart.add_line(RUNNER, 2, "41")
        cart.add_line(CLASSIC, 1, "39")
        cart.toggle_select("p2", "39")

        totals = cart.totals()
        assert totals.all.count == 3
        assert totals.all.lines == 2
        assert totals.all.total == Money.of(55000)
        assert totals.selected.count == 2
        assert totals.selected.lines == 1
        assert totals.selected.total == Money.of(40000)

    def test_empty_cart(self):
        totals = Cart().totals()
        assert totals.all.count == 0
        assert totals.all.total == Money.zero()
