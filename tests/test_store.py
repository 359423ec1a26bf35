"""
Record store tests against a real SQLite file.
"""
import sqlite3

import pytest

from fims.errors import NotFoundError, StoreError, ValidationError
from fims.services.demo import add_inspection
from fims.services.store import SqliteRecordStore


class TestListInspections:

    def test_newest_first(self, seeded, store):
        records = store.list_inspections('user-sup', 'supervisor')
        assert [r['id'] for r in records] == ['insp-5', 'insp-4', 'insp-3', 'insp-2', 'insp-1']

    def test_inspector_sees_only_own_assignments(self, seeded, store):
        records = store.list_inspections('user-001', 'inspector')
        assert [r['id'] for r in records] == ['insp-5', 'insp-3', 'insp-1']

    def test_no_role_sees_everything(self, seeded, store):
        assert len(store.list_inspections('user-001')) == 5

    def test_row_decoding(self, seeded, store):
        record = store.get_inspection('insp-3')
        assert record['form_data'] == {'children_present': 24}
        assert record['requires_revisit'] is False
        assert record['is_compliant'] is None
        assert store.get_inspection('insp-2')['is_compliant'] is True

    def test_non_json_form_data_passes_through(self, seeded, store, db):
        add_inspection(db, 'INS-2026-0099', 'cat-ang', 'user-001', 'Legacy',
                       inspection_id='insp-99', form_data='not json')
        db.commit()
        assert store.get_inspection('insp-99')['form_data'] == 'not json'

    def test_get_missing_inspection(self, seeded, store):
        with pytest.raises(NotFoundError):
            store.get_inspection('nope')


class TestUpdateStatus:

    def test_sets_status_and_updated_at(self, seeded, store):
        record = store.update_status('insp-1', 'planned')
        assert record['status'] == 'planned'
        assert record['updated_at']

    def test_rejects_status_outside_enum(self, seeded, store):
        with pytest.raises(ValidationError):
            store.update_status('insp-1', 'completed')
        assert store.get_inspection('insp-1')['status'] == 'draft'

    def test_rejects_fields_outside_allow_list(self, seeded, store):
        with pytest.raises(ValidationError):
            store.update_status('insp-1', 'planned', {'inspection_number': 'X'})

    def test_missing_record(self, seeded, store):
        with pytest.raises(NotFoundError):
            store.update_status('nope', 'approved')

    def test_inspection_date_cannot_sit_on_planning_state(self, seeded, store):
        # insp-2 has an inspection_date; moving it back to planned breaks the invariant
        with pytest.raises(StoreError):
            store.update_status('insp-2', 'planned')
        assert store.get_inspection('insp-2')['status'] == 'approved'

    def test_reassign_to_missing_inspector_violates_foreign_key(self, seeded, store):
        with pytest.raises(StoreError):
            store.update_status('insp-1', 'in_progress', {'inspector_id': 'ghost'})


class TestReferenceData:

    def test_categories(self, seeded, store):
        categories = store.list_categories()
        assert [c['id'] for c in categories] == ['cat-ang', 'cat-off', 'cat-old']
        assert categories[2]['is_active'] is False
        assert [c['id'] for c in store.list_categories(active_only=True)] == ['cat-ang', 'cat-off']

    def test_inspectors_exclude_inactive(self, seeded, store):
        inspectors = store.list_inspectors()
        assert {i['id'] for i in inspectors} == {'user-sup', 'user-001', 'user-002'}
        assert store.get_inspector('user-old') is None
        assert store.get_inspector('user-001')['name'] == 'Sunita Deshmukh'

    def test_photos_in_photo_order(self, seeded, store):
        photos = store.list_photos('insp-3')
        assert [p['photo_order'] for p in photos] == [10, 20, 35]
        assert photos[0]['photo_name'] == 'Entrance'

    def test_photo_order_unique_per_inspection(self, seeded, db):
        from fims.services.demo import add_photo
        with pytest.raises(sqlite3.IntegrityError):
            add_photo(db, 'insp-3', '/uploads/dup.jpg', 10)


class TestInvariants:

    def test_undefined_status_cannot_be_stored(self, seeded, db):
        with pytest.raises(sqlite3.IntegrityError):
            add_inspection(db, 'INS-2026-0100', 'cat-ang', 'user-001', 'X', status='on_hold')

    def test_coordinates_come_in_pairs(self, seeded, db):
        with pytest.raises(sqlite3.IntegrityError):
            add_inspection(db, 'INS-2026-0101', 'cat-ang', 'user-001', 'X', latitude=19.9)

    def test_inspection_number_is_unique(self, seeded, db):
        with pytest.raises(sqlite3.IntegrityError):
            add_inspection(db, 'INS-2026-0001', 'cat-ang', 'user-001', 'X')


class TestStoreErrors:

    def test_database_failure_becomes_store_error(self, seeded, db):
        store = SqliteRecordStore(db)
        db.execute("DROP TABLE inspection_photo")
        with pytest.raises(StoreError):
            store.list_photos('insp-3')
