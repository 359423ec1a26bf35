"""
Demo data for FIMS.
Inserts inspectors, categories and a spread of inspections across every status
so the dashboard has something to count and filter.

Usage: flask --app fims seed-demo
"""
import json
import random
from datetime import date, timedelta

from fims.utils import generate_id, generate_inspection_number


def add_inspector(db, name, role='inspector', inspector_id=None, active=True):
    inspector_id = inspector_id or generate_id('user')
    db.execute("""
        INSERT INTO inspector (id, name, role, active)
        VALUES (?, ?, ?, ?)
    """, [inspector_id, name, role, 1 if active else 0])
    return inspector_id


def add_category(db, name, form_type, name_marathi=None, description=None,
                 is_active=True, category_id=None):
    category_id = category_id or generate_id('cat')
    db.execute("""
        INSERT INTO category (id, name, name_marathi, description, form_type, is_active)
        VALUES (?, ?, ?, ?, ?, ?)
    """, [category_id, name, name_marathi, description, form_type, 1 if is_active else 0])
    return category_id


def add_inspection(db, inspection_number, category_id, inspector_id, location_name,
                   status='draft', inspection_id=None, **fields):
    """Insert one inspection row. Extra columns go in as keyword arguments."""
    inspection_id = inspection_id or generate_id('insp')
    if isinstance(fields.get('form_data'), (dict, list)):
        fields['form_data'] = json.dumps(fields['form_data'])
    row = {
        'id': inspection_id,
        'inspection_number': inspection_number,
        'category_id': category_id,
        'inspector_id': inspector_id,
        'location_name': location_name,
        'status': status,
    }
    row.update(fields)
    columns = ', '.join(row)
    placeholders = ', '.join('?' for _ in row)
    db.execute(
        "INSERT INTO inspection ({}) VALUES ({})".format(columns, placeholders),
        list(row.values())
    )
    return inspection_id


def add_photo(db, inspection_id, photo_url, photo_order, photo_name=None,
              description=None, photo_id=None):
    photo_id = photo_id or generate_id('photo')
    db.execute("""
        INSERT INTO inspection_photo (id, inspection_id, photo_url, photo_name,
                                      description, photo_order)
        VALUES (?, ?, ?, ?, ?, ?)
    """, [photo_id, inspection_id, photo_url, photo_name, description, photo_order])
    return photo_id


DEMO_INSPECTORS = [
    ('user-admin', 'Asha Patil', 'admin'),
    ('user-sup', 'Ramesh Kulkarni', 'supervisor'),
    ('user-001', 'Sunita Deshmukh', 'inspector'),
    ('user-002', 'Vikas Jadhav', 'inspector'),
]

DEMO_CATEGORIES = [
    ('cat-anganwadi', 'Anganwadi Centre Inspection', 'अंगणवाडी केंद्र तपासणी', 'anganwadi'),
    ('cat-office', 'Office Inspection', 'कार्यालय तपासणी', 'office_inspection'),
    ('cat-school', 'School Inspection', 'शाळा तपासणी', 'school_inspection'),
]

DEMO_LOCATIONS = [
    'Chandrapur Ward 3', 'Ballarpur Block Office', 'Mul Anganwadi 12',
    'Warora Primary School', 'Bhadravati Centre 4', 'Rajura Panchayat Office',
    'Gondpipri Anganwadi 7', 'Sindewahi School 2',
]

# (status, has inspection_date)
DEMO_STATUSES = [
    ('draft', False), ('planned', False), ('planned', False), ('in_progress', True),
    ('submitted', True), ('submitted', True), ('under_review', True), ('approved', True),
    ('approved', True), ('approved', True), ('rejected', True), ('reassigned', True),
]


def populate_demo(db, today=None, seed=42):
    """Fill an empty database with demo data. Returns number of inspections."""
    rng = random.Random(seed)
    today = today or date.today()

    for inspector_id, name, role in DEMO_INSPECTORS:
        add_inspector(db, name, role, inspector_id=inspector_id)
    for category_id, name, name_marathi, form_type in DEMO_CATEGORIES:
        add_category(db, name, form_type, name_marathi=name_marathi, category_id=category_id)

    field_inspectors = [i for i in DEMO_INSPECTORS if i[2] == 'inspector']
    for n, (status, inspected) in enumerate(DEMO_STATUSES, start=1):
        inspector_id, inspector_name, _ = rng.choice(field_inspectors)
        category_id = rng.choice(DEMO_CATEGORIES)[0]
        planned = today - timedelta(days=rng.randint(1, 60))
        fields = {
            'planned_date': planned.isoformat(),
            'filled_by_name': inspector_name if inspected else None,
            'created_at': (planned - timedelta(days=7)).isoformat() + ' 09:00:00',
        }
        if inspected:
            fields['inspection_date'] = (planned + timedelta(days=rng.randint(0, 5))).isoformat()
            fields['is_compliant'] = 1 if status == 'approved' else rng.choice([0, 1])
            fields['form_data'] = {'remarks': 'Demo inspection {}'.format(n)}
        if rng.random() < 0.5:
            fields['latitude'] = round(19.95 + rng.random() / 10, 6)
            fields['longitude'] = round(79.29 + rng.random() / 10, 6)

        inspection_id = add_inspection(
            db, generate_inspection_number(n, today.year), category_id, inspector_id,
            rng.choice(DEMO_LOCATIONS), status=status, **fields
        )
        if inspected:
            for order in range(1, rng.randint(1, 3) + 1):
                add_photo(db, inspection_id,
                          '/uploads/{}/{}.jpg'.format(inspection_id, order),
                          photo_order=order * 10,
                          photo_name='Photo {}'.format(order))

    db.commit()
    return len(DEMO_STATUSES)
