from datetime import date

import pytest

from ors.models import College, Faculty, Role, Student
from ors.store import get_descriptor
from ors.store.descriptor import FilterField
from ors.store.query import build_predicate, build_search, escape_like, is_set, page_window


class TestQueryBuilder:
    """Filter records become bound predicates."""

    def test_unset_fields_are_ignored(self):
        criteria = Student(first_name='  ', college_id=0, dob=None)
        assert build_predicate(get_descriptor('student'), criteria) == []
        assert build_predicate(get_descriptor('student'), None) == []

    def test_set_fields_are_anded(self):
        criteria = Student(first_name='Asha', college_id=3, dob=date(2001, 4, 12))
        clauses = build_predicate(get_descriptor('student'), criteria)
        assert len(clauses) == 3

    def test_values_are_bound_parameters(self):
        criteria = Faculty(first_name="x' OR '1'='1", mobile_no='9876543210')
        stmt = build_search(get_descriptor('faculty'), criteria)
        compiled = stmt.compile()
        assert "x' OR" not in str(compiled)
        assert "x' OR '1'='1%" in compiled.params.values()
        assert "9876543210" in compiled.params.values()

    def test_prefix_and_contains_patterns(self):
        stmt = build_search(get_descriptor('role'), Role(name='ad'))
        assert '%ad%' in stmt.compile().params.values()

        stmt = build_search(get_descriptor('college'), College(name='Sta'))
        assert 'Sta%' in stmt.compile().params.values()

    @pytest.mark.parametrize('raw, escaped', [
        ('100%', '100\\%'),
        ('a_b', 'a\\_b'),
        ('back\\slash', 'back\\\\slash'),
        ("O'Brien", "O'Brien"),
    ])
    def test_escape_like(self, raw, escaped):
        assert escape_like(raw) == escaped

    def test_is_set(self):
        assert not is_set(None)
        assert not is_set('')
        assert not is_set(0)
        assert is_set(5)
        assert is_set('x')
        assert is_set(date(2020, 1, 1))

    def test_page_window(self):
        assert page_window(1, 10) == (0, 10)
        assert page_window(3, 10) == (20, 10)
        assert page_window(0, 10) == (0, 10)
        assert page_window(2, 0) is None

    def test_unknown_match_mode_rejected(self):
        with pytest.raises(ValueError):
            FilterField('name', 'regex')
