from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from ors.exceptions import DuplicateKeyError, StorageError
from ors.models import Role, Timetable
from ors.store import EntityStore, get_descriptor, get_store


class TestEntityStore:
    """Transactional add/update/delete/find/search on one entity."""

    def test_role_lifecycle(self, role_store, make_role):
        """Add, reject duplicate, rename, delete."""
        admin = make_role('Admin')
        assert admin.id == 1
        assert role_store.find_by_unique_key('Admin').id == 1

        with pytest.raises(DuplicateKeyError) as exc_info:
            make_role('Admin')
        assert exc_info.value.message == 'Role already exists'
        assert len(role_store.list()) == 1

        admin.name = 'SuperAdmin'
        role_store.update(admin)
        assert role_store.find_by_pk(1).name == 'SuperAdmin'
        assert role_store.find_by_unique_key('Admin') is None

        role_store.delete(1)
        assert role_store.find_by_pk(1) is None

    def test_add_issues_fresh_positive_ids(self, role_store, make_role):
        first = make_role('Admin')
        second = make_role('Student')
        assert first.id > 0
        assert second.id == first.id + 1
        assert role_store.next_id() == second.id + 1

    def test_duplicate_add_leaves_storage_unchanged(self, role_store, make_role):
        make_role('Admin', 'original')
        with pytest.raises(DuplicateKeyError):
            make_role('Admin', 'second attempt')
        stored = role_store.list()
        assert [(r.name, r.description) for r in stored] == [('Admin', 'original')]

    def test_update_colliding_with_other_record_fails(self, role_store, make_role):
        make_role('Admin')
        student = make_role('Student')
        student.name = 'Admin'
        with pytest.raises(DuplicateKeyError):
            role_store.update(student)
        assert role_store.find_by_pk(student.id).name == 'Student'

    def test_update_keeping_own_key_succeeds(self, role_store, make_role):
        admin = make_role('Admin', 'before')
        admin.description = 'after'
        role_store.update(admin)
        assert role_store.find_by_pk(admin.id).description == 'after'

    def test_update_without_id_is_ignored(self, role_store, make_role):
        make_role('Admin')
        role_store.update(Role(id=0, name='Ghost'))
        assert [r.name for r in role_store.list()] == ['Admin']

    def test_update_keeps_creation_audit(self, role_store, make_role):
        admin = make_role('Admin')
        original_created = role_store.find_by_pk(admin.id).created_datetime
        admin.created_by = 'someone-else'
        admin.created_datetime = None
        admin.modified_by = 'editor'
        role_store.update(admin)

        stored = role_store.find_by_pk(admin.id)
        assert stored.created_by == 'root'
        assert stored.created_datetime == original_created
        assert stored.modified_by == 'editor'
        assert admin.created_by == 'root'

    def test_identifiers_are_not_recycled(self, role_store, make_role):
        make_role('Admin')
        student = make_role('Student')
        role_store.delete(student.id)
        kiosk = make_role('Kiosk')
        assert kiosk.id == student.id + 1

    def test_delete_unknown_id_is_harmless(self, role_store, make_role):
        make_role('Admin')
        role_store.delete(99)
        assert len(role_store.list()) == 1

    def test_list_equals_unfiltered_search(self, role_store, make_role):
        for name in ('Admin', 'Student', 'Faculty'):
            make_role(name)
        assert [r.id for r in role_store.search(None, 0, 0)] == [r.id for r in role_store.list()]

    def test_pages_concatenate_to_full_result(self, role_store, make_role):
        for index in range(7):
            make_role(f'Role{index}')
        pages = [role_store.search(None, page_no, 3) for page_no in (1, 2, 3)]
        concatenated = [r.id for page in pages for r in page]
        assert concatenated == [r.id for r in role_store.list()]
        assert [len(page) for page in pages] == [3, 3, 1]

    def test_twenty_five_rows_page_by_ten(self, role_store, make_role):
        for index in range(25):
            make_role(f'Role{index:02d}')
        assert [len(role_store.search(None, page, 10)) for page in (1, 2, 3)] == [10, 10, 5]
        assert role_store.search(None, 4, 10) == []

    def test_search_filters_and_escapes(self, role_store, make_role):
        make_role('Admin', '100% access')
        make_role('Auditor', '100 percent')
        make_role('Kiosk', 'under_score')

        criteria = Role(description='100%')
        assert [r.name for r in role_store.search(criteria)] == ['Admin']

        criteria = Role(description='0_p')
        assert role_store.search(criteria) == []

        criteria = Role(description='r_s')
        assert [r.name for r in role_store.search(criteria)] == ['Kiosk']

        criteria = Role(name='d')
        assert [r.name for r in role_store.search(criteria)] == ['Admin', 'Auditor']

        criteria = Role(name="O'Brien")
        assert role_store.search(criteria) == []

    def test_search_by_id_equality(self, role_store, make_role):
        make_role('Admin')
        student = make_role('Student')
        assert [r.name for r in role_store.search(Role(id=student.id))] == ['Student']
        assert len(role_store.search(Role(id=0))) == 2

    def test_count(self, role_store, make_role):
        make_role('Admin')
        make_role('Auditor')
        make_role('Student')
        assert role_store.count() == 3
        assert role_store.count(Role(name='A')) == 2

    def test_composite_unique_key(self):
        store = get_store('timetable')
        exam_day = date(2025, 5, 10)
        store.add(Timetable(course_id=1, subject_id=2, exam_date=exam_day, semester='2'))

        assert store.find_by_unique_key((1, 2, exam_day)).semester == '2'
        assert store.find_by_unique_key((1, 3, exam_day)) is None
        with pytest.raises(DuplicateKeyError) as exc_info:
            store.add(Timetable(course_id=1, subject_id=2, exam_date=exam_day, semester='4'))
        assert exc_info.value.key_field == 'course_id,subject_id,exam_date'


class TestStoreFailures:
    """Storage failures surface as StorageError."""

    def test_read_failure_wraps_cause(self, app):
        store = EntityStore(get_descriptor('role'), session_factory=_broken_session)
        with pytest.raises(StorageError) as exc_info:
            store.find_by_pk(1)
        assert isinstance(exc_info.value.cause, OperationalError)

    def test_write_failure_rolls_back_and_wraps(self, app):
        factory = _FailingCommitSession
        store = EntityStore(get_descriptor('role'), session_factory=factory)
        with pytest.raises(StorageError) as exc_info:
            store.add(Role(name='Admin', description='x'))
        assert isinstance(exc_info.value.cause, OperationalError)
        assert exc_info.value.rollback_failure is None
        assert factory.rolled_back

    def test_rollback_failure_is_carried(self, app):
        factory = _FailingRollbackSession
        store = EntityStore(get_descriptor('role'), session_factory=factory)
        with pytest.raises(StorageError) as exc_info:
            store.add(Role(name='Admin', description='x'))
        failure = exc_info.value.rollback_failure
        assert failure is not None
        assert failure.action == 'add'
        assert isinstance(exc_info.value.cause, OperationalError)

    def test_constraint_conflict_maps_to_duplicate(self, role_store, make_role):
        make_role('Admin')
        store = _RacingStore(get_descriptor('role'))
        with pytest.raises(DuplicateKeyError) as exc_info:
            store.add(Role(name='Admin', description='late writer'))
        assert exc_info.value.message == 'Role already exists'
        assert role_store.count() == 1


class _RacingStore(EntityStore):
    """Misses the first duplicate check, as if another writer got in between."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._checks = 0

    def _lookup(self, session, key):
        self._checks += 1
        if self._checks == 1:
            return None
        return super()._lookup(session, key)


def _operational_error():
    return OperationalError('statement', {}, Exception('database is gone'))


class _BrokenSession:
    def __getattr__(self, name):
        def _fail(*args, **kwargs):
            raise _operational_error()
        return _fail

    def close(self):
        pass


def _broken_session():
    return _BrokenSession()


class _FailingCommitSession:
    """A session whose reads succeed and whose commit fails."""

    rolled_back = False

    def __init__(self):
        from ors.store.engine import default_session
        self._inner = default_session()

    def __getattr__(self, name):
        return getattr(self._inner, name)

    def commit(self):
        raise _operational_error()

    def rollback(self):
        type(self).rolled_back = True
        self._inner.rollback()

    def close(self):
        self._inner.close()


class _FailingRollbackSession(_FailingCommitSession):

    def rollback(self):
        self._inner.rollback()
        raise _operational_error()
