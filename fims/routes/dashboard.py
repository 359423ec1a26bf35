"""
Dashboard routes - counters, recent inspections and the filtered table.
Counters always cover every inspection the user can see; filters only narrow
the table rows.
"""
from flask import Blueprint, current_app, request
from fims.auth import available_actions, get_current_user, require_auth, require_supervisor
from fims.services.lifecycle import KNOWN_STATUSES, resolve_status_label
from fims.services.query import COLUMN_FILTERS, compute_counters, dashboard_rows, filter_records
from fims.services.store import get_store
from fims.utils.labels import category_name, normalize_language
from fims.utils.responses import success_resp

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/dashboard')


def request_language():
    return normalize_language(request.args.get('lang') or current_app.config['DEFAULT_LANGUAGE'])


def criteria_from_args(args):
    """Build filter criteria from query args (q, category, status, f_<column>)."""
    return {
        'search_term': args.get('q', ''),
        'selected_category': args.get('category', ''),
        'selected_status': args.get('status', ''),
        'column_filters': {key: args.get('f_' + key, '') for key in COLUMN_FILTERS},
    }


@dashboard_bp.route('/')
@require_auth
def dashboard():
    """Counters, recent inspections and filtered rows for the current user."""
    lang = request_language()
    store = get_store()
    user = get_current_user()
    role = user['role'] or 'inspector'

    records = store.list_inspections(user['id'], role)
    categories = store.list_categories()

    criteria = criteria_from_args(request.args)
    filtered = filter_records(records, criteria, categories, lang)

    recent_limit = current_app.config['RECENT_INSPECTIONS']
    current_app.logger.debug("Dashboard for %s: %d of %d inspections match",
                             user['id'], len(filtered), len(records))

    return success_resp('Dashboard loaded', {
        'counters': compute_counters(records),
        'recent': dashboard_rows(records[:recent_limit], categories, lang),
        'inspections': dashboard_rows(filtered, categories, lang),
        'actions': available_actions(role),
        'categories': [
            {'id': c['id'], 'name': category_name(c, lang), 'form_type': c['form_type']}
            for c in categories if c['is_active']
        ],
        'statuses': [
            {'value': s.value, 'label': resolve_status_label(s, lang)}
            for s in KNOWN_STATUSES
        ],
    })


@dashboard_bp.route('/inspectors')
@require_supervisor
def inspectors():
    """Users an inspection can be reassigned to for revisit."""
    return success_resp('Inspectors loaded', [
        {'id': i['id'], 'name': i['name'], 'role': i['role'],
         'label': '{} ({})'.format(i['name'], i['role'].replace('_', ' ').title())}
        for i in get_store().list_inspectors()
    ])
