from ors.models.enumerations import Operation
from ors.services.pagination import fetch_page, resolve_page


class TestResolvePage:
    """Page-number bookkeeping for list navigation."""

    def test_defaults(self):
        assert resolve_page(None, 0, 0, 10) == (1, 10)

    def test_search_resets_to_first_page(self):
        assert resolve_page(Operation.SEARCH, 4, 10, 10) == (1, 10)

    def test_next_increments_without_upper_clamp(self):
        assert resolve_page(Operation.NEXT, 7, 5, 10) == (8, 5)

    def test_previous_never_below_one(self):
        assert resolve_page(Operation.PREVIOUS, 3, 10, 10) == (2, 10)
        assert resolve_page(Operation.PREVIOUS, 1, 10, 10) == (1, 10)

    def test_delete_returns_to_first_page(self):
        assert resolve_page(Operation.DELETE, 3, 10, 10) == (1, 10)


class TestFetchPage:
    """Look-ahead sizing of the following page."""

    @staticmethod
    def _search_over(rows):
        def search(criteria, page_no, page_size):
            start = (page_no - 1) * page_size
            return rows[start:start + page_size]
        return search

    def test_look_ahead_counts_next_page(self):
        page = fetch_page(self._search_over(list(range(25))), None, 2, 10)
        assert page.items == list(range(10, 20))
        assert page.next_list_size == 5
        assert page.has_next

    def test_last_page_has_no_look_ahead(self):
        page = fetch_page(self._search_over(list(range(25))), None, 3, 10)
        assert len(page.items) == 5
        assert page.next_list_size == 0
        assert not page.has_next
