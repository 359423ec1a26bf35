"""
Query/aggregation engine for the dashboard.

Everything here is a pure function over the record list it is given: no
caching, no incremental index. Filtering keeps the input order; counters are
always computed over the unfiltered set.
"""
import logging
import warnings

from fims.errors import DefaultedLookupWarning
from fims.services.lifecycle import (
    COMPLETED_STATUSES, PENDING_STATUSES, SUBMITTED_STATUSES, Status,
    resolve_status_label, resolve_status_tier,
)
from fims.utils.labels import DEFAULT_LANGUAGE, category_name, format_date

logger = logging.getLogger(__name__)

COLUMN_FILTERS = ('inspection_number', 'location', 'category', 'status', 'date', 'filled_by_name')

# Placeholder for a category_id that matches no category
UNRESOLVED_CATEGORY = ''


def empty_criteria():
    return {
        'search_term': '',
        'selected_category': '',
        'selected_status': '',
        'column_filters': {key: '' for key in COLUMN_FILTERS},
    }


def normalize_criteria(criteria):
    """Fill in missing keys; None values count as empty."""
    normalized = empty_criteria()
    if not criteria:
        return normalized
    for key in ('search_term', 'selected_category', 'selected_status'):
        normalized[key] = str(criteria.get(key) or '')
    for key, value in (criteria.get('column_filters') or {}).items():
        if key in normalized['column_filters']:
            normalized['column_filters'][key] = str(value or '')
    return normalized


def index_categories(categories):
    return {c['id']: c for c in categories or ()}


def resolve_category_name(category_id, category_index, lang=DEFAULT_LANGUAGE):
    """Localized name of a category, or UNRESOLVED_CATEGORY if it is dangling."""
    category = category_index.get(category_id)
    if category is None:
        logger.debug("category_id %r did not resolve", category_id)
        warnings.warn('Category {!r} not found, using placeholder'.format(category_id),
                      DefaultedLookupWarning, stacklevel=2)
        return UNRESOLVED_CATEGORY
    return category_name(category, lang)


def display_date(record, lang=DEFAULT_LANGUAGE):
    """inspection_date, else planned_date, formatted for the language."""
    return format_date(record.get('inspection_date') or record.get('planned_date'), lang)


def _contains(value, needle):
    if value is None:
        return False
    return needle.lower() in str(value).lower()


def matches(record, criteria, category_index, lang=DEFAULT_LANGUAGE):
    """True when the record passes every non-empty criterion."""
    search = criteria['search_term']
    if search and not (_contains(record.get('location_name'), search)
                       or _contains(record.get('inspection_number'), search)):
        return False

    if criteria['selected_category'] and record.get('category_id') != criteria['selected_category']:
        return False

    if criteria['selected_status'] and record.get('status') != criteria['selected_status']:
        return False

    columns = criteria['column_filters']
    if columns['inspection_number'] and not _contains(record.get('inspection_number'), columns['inspection_number']):
        return False
    if columns['location'] and not _contains(record.get('location_name'), columns['location']):
        return False
    if columns['category']:
        name = resolve_category_name(record.get('category_id'), category_index, lang)
        if not _contains(name, columns['category']):
            return False
    if columns['status']:
        if not _contains(resolve_status_label(record.get('status'), lang), columns['status']):
            return False
    if columns['date'] and not _contains(display_date(record, lang), columns['date']):
        return False
    if columns['filled_by_name'] and not _contains(record.get('filled_by_name'), columns['filled_by_name']):
        return False

    return True


def filter_records(records, criteria=None, categories=(), lang=DEFAULT_LANGUAGE):
    """Records passing all criteria, in their original order."""
    criteria = normalize_criteria(criteria)
    category_index = index_categories(categories)
    return [r for r in records if matches(r, criteria, category_index, lang)]


def completion_rate(completed, total):
    """Percentage rounded half-up; 0 for an empty set."""
    if total == 0:
        return 0
    return (completed * 200 + total) // (total * 2)


def compute_counters(records):
    """Dashboard counters over the full, unfiltered record set."""
    total = pending = completed = submitted = 0
    for record in records:
        total += 1
        status = Status.parse(record.get('status'))
        if status in PENDING_STATUSES:
            pending += 1
        elif status in COMPLETED_STATUSES:
            completed += 1
        elif status in SUBMITTED_STATUSES:
            submitted += 1
    return {
        'total': total,
        'pending': pending,
        'completed': completed,
        'submitted': submitted,
        'completion_rate': completion_rate(completed, total),
    }


def decorate(record, category_index, lang=DEFAULT_LANGUAGE):
    """Copy of the record with the values the dashboard table shows."""
    row = dict(record)
    row['category_name'] = resolve_category_name(record.get('category_id'), category_index, lang)
    row['status_label'] = resolve_status_label(record.get('status'), lang)
    row['status_tier'] = resolve_status_tier(record.get('status')).value
    row['display_date'] = display_date(record, lang)
    return row


def dashboard_rows(records, categories=(), lang=DEFAULT_LANGUAGE):
    category_index = index_categories(categories)
    return [decorate(r, category_index, lang) for r in records]
