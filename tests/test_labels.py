from datetime import date, datetime

from fims.utils import generate_id, generate_inspection_number
from fims.utils.labels import category_name, format_date, normalize_language, parse_date


def test_format_date_per_language():
    assert format_date('2026-03-05') == '3/5/2026'
    assert format_date('2026-03-05', 'mr') == '5/3/2026'


def test_format_date_accepts_timestamps_and_objects():
    assert format_date('2026-03-05T10:30:00Z') == '3/5/2026'
    assert format_date(date(2026, 12, 1)) == '12/1/2026'
    assert format_date(datetime(2026, 12, 1, 8, 0)) == '12/1/2026'


def test_format_date_bad_input_is_empty():
    assert format_date(None) == ''
    assert format_date('') == ''
    assert format_date('next tuesday') == ''
    assert parse_date('2026-13-40') is None


def test_category_name_localization():
    category = {'name': 'Office Inspection', 'name_marathi': 'कार्यालय तपासणी'}
    assert category_name(category) == 'Office Inspection'
    assert category_name(category, 'mr') == 'कार्यालय तपासणी'
    assert category_name({'name': 'Office Inspection', 'name_marathi': None}, 'mr') == 'Office Inspection'


def test_normalize_language():
    assert normalize_language('mr') == 'mr'
    assert normalize_language('de') == 'en'
    assert normalize_language(None) == 'en'


def test_ids():
    assert generate_id('insp').startswith('insp-')
    assert len(generate_id()) == 8
    assert generate_inspection_number(7, 2026) == 'INS-2026-0007'
