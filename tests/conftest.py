"""
Shared fixtures: an app on a temp database, a raw connection to the same
file, seeded reference data and logged-in clients.
"""
import pytest

from fims import create_app
from fims.services.db import connect
from fims.services.demo import add_category, add_inspection, add_inspector, add_photo
from fims.services.store import SqliteRecordStore


@pytest.fixture
def app(tmp_path):
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test',
        'DATABASE_PATH': str(tmp_path / 'fims.db'),
    })
    yield app


@pytest.fixture
def db(app):
    conn = connect(app.config['DATABASE_PATH'])
    yield conn
    conn.close()


@pytest.fixture
def store(db):
    return SqliteRecordStore(db)


@pytest.fixture
def seeded(db):
    """Five inspections across two inspectors, one with a dangling category.

    created_at ascends with the number, so newest-first order is 5..1.
    """
    add_inspector(db, 'Ramesh Kulkarni', 'supervisor', inspector_id='user-sup')
    add_inspector(db, 'Sunita Deshmukh', 'inspector', inspector_id='user-001')
    add_inspector(db, 'Vikas Jadhav', 'inspector', inspector_id='user-002')
    add_inspector(db, 'Former Staff', 'inspector', inspector_id='user-old', active=False)

    add_category(db, 'Anganwadi Centre', 'anganwadi', name_marathi='अंगणवाडी केंद्र',
                 category_id='cat-ang')
    add_category(db, 'Office Inspection', 'office_inspection', category_id='cat-off')
    add_category(db, 'Retired Form', 'retired', is_active=False, category_id='cat-old')

    add_inspection(db, 'INS-2026-0001', 'cat-ang', 'user-001', 'Chandrapur Ward 3',
                   status='draft', inspection_id='insp-1',
                   planned_date='2026-03-01', created_at='2026-03-01 09:00:00')
    add_inspection(db, 'INS-2026-0002', 'cat-off', 'user-002', 'Ballarpur Block Office',
                   status='approved', inspection_id='insp-2',
                   inspection_date='2026-03-05', filled_by_name='Vikas Jadhav',
                   is_compliant=1, created_at='2026-03-02 09:00:00')
    add_inspection(db, 'INS-2026-0003', 'cat-ang', 'user-001', 'Mul Anganwadi 12',
                   status='submitted', inspection_id='insp-3',
                   inspection_date='2026-03-06', filled_by_name='Sunita Deshmukh',
                   form_data={'children_present': 24}, created_at='2026-03-03 09:00:00')
    add_inspection(db, 'INS-2026-0004', 'cat-gone', 'user-002', 'Warora Primary School',
                   status='approved', inspection_id='insp-4',
                   inspection_date='2026-03-07', created_at='2026-03-04 09:00:00')
    add_inspection(db, 'INS-2026-0005', 'cat-off', 'user-001', 'Rajura Panchayat Office',
                   status='rejected', inspection_id='insp-5',
                   inspection_date='2026-03-08', latitude=19.96, longitude=79.30,
                   created_at='2026-03-05 09:00:00')

    add_photo(db, 'insp-3', '/uploads/insp-3/b.jpg', 20, photo_name='Kitchen', photo_id='ph-b')
    add_photo(db, 'insp-3', '/uploads/insp-3/a.jpg', 10, photo_name='Entrance', photo_id='ph-a')
    add_photo(db, 'insp-3', '/uploads/insp-3/c.jpg', 35, photo_id='ph-c')
    db.commit()
    return db


def _login(app, code):
    client = app.test_client()
    client.get('/login?u={}'.format(code))
    return client


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def supervisor_client(app, seeded):
    return _login(app, 'user-sup')


@pytest.fixture
def inspector_client(app, seeded):
    return _login(app, 'user-001')
