"""
Display text for statuses, categories and dates.

Two languages are carried: English ('en', default) and Marathi ('mr').
Lookups never raise; a missing key falls back to the caller's default.
"""
from datetime import date, datetime

DEFAULT_LANGUAGE = 'en'
LANGUAGES = ('en', 'mr')

STATUS_LABELS = {
    'en': {
        'draft': 'Draft',
        'planned': 'Planned',
        'in_progress': 'In Progress',
        'submitted': 'Submitted',
        'under_review': 'Under Review',
        'approved': 'Approved',
        'rejected': 'Rejected',
        'reassigned': 'Reassigned',
    },
    'mr': {
        'draft': 'मसुदा',
        'planned': 'नियोजित',
        'in_progress': 'प्रगतीपथावर',
        'submitted': 'सादर केले',
        'under_review': 'पुनरावलोकनाधीन',
        'approved': 'मंजूर',
        'rejected': 'नाकारले',
        'reassigned': 'पुन्हा नियुक्त',
    },
}

# toLocaleDateString() shapes: en-US is M/D/YYYY, mr-IN is D/M/YYYY
DATE_FORMATS = {
    'en': '{d.month}/{d.day}/{d.year}',
    'mr': '{d.day}/{d.month}/{d.year}',
}


def normalize_language(lang):
    if lang in LANGUAGES:
        return lang
    return DEFAULT_LANGUAGE


def translate_status(status, lang=DEFAULT_LANGUAGE, default=None):
    """Label for a raw status key, or `default` when there is none."""
    table = STATUS_LABELS[normalize_language(lang)]
    return table.get(status, default)


def category_name(category, lang=DEFAULT_LANGUAGE):
    """Localized category name; Marathi falls back to the default name."""
    if normalize_language(lang) == 'mr' and category.get('name_marathi'):
        return category['name_marathi']
    return category.get('name') or ''


def parse_date(value):
    """Parse an ISO date/datetime string. Returns None if it can't."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def format_date(value, lang=DEFAULT_LANGUAGE):
    """Locale-formatted date string, '' when the value is missing or bad."""
    d = parse_date(value)
    if d is None:
        return ''
    return DATE_FORMATS[normalize_language(lang)].format(d=d)
