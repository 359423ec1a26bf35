"""
Inspection routes - view one inspection, its photos, and the supervisor
actions: complete, reassign for revisit, delete.
Delete confirmation is the client's job; by the time the POST arrives the
user has confirmed.
"""
from flask import Blueprint, abort, current_app, request
from fims.auth import get_current_user, require_auth, require_supervisor
from fims.services.lifecycle import LifecycleController
from fims.services.query import decorate, index_categories
from fims.services.store import get_store
from fims.routes.dashboard import request_language
from fims.utils.responses import success_resp

inspections_bp = Blueprint('inspections', __name__, url_prefix='/inspections')


def _visible_inspection(store, inspection_id):
    """Load an inspection, hiding other inspectors' work from inspectors."""
    record = store.get_inspection(inspection_id)
    user = get_current_user()
    if user['role'] == 'inspector' and record['inspector_id'] != user['id']:
        abort(404)
    return record


@inspections_bp.route('/<inspection_id>')
@require_auth
def view_inspection(inspection_id):
    store = get_store()
    record = _visible_inspection(store, inspection_id)
    row = decorate(record, index_categories(store.list_categories()), request_language())
    row['photos'] = store.list_photos(inspection_id)
    return success_resp('Inspection loaded', row)


@inspections_bp.route('/<inspection_id>/photos')
@require_auth
def list_photos(inspection_id):
    """Photos in display order (ascending photo_order)."""
    store = get_store()
    _visible_inspection(store, inspection_id)
    photos = store.list_photos(inspection_id)
    if not photos:
        return success_resp('No photos found for this inspection', [])
    return success_resp('Photos loaded', photos)


@inspections_bp.route('/<inspection_id>/complete', methods=['POST'])
@require_supervisor
def complete_inspection(inspection_id):
    record = LifecycleController(get_store()).complete_inspection(inspection_id)
    current_app.logger.info("%s completed inspection %s", get_current_user()['id'], inspection_id)
    return success_resp('Inspection marked as completed', record)


@inspections_bp.route('/<inspection_id>/revisit', methods=['POST'])
@require_supervisor
def revisit_inspection(inspection_id):
    """Reassign to the selected inspector and put back in progress."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = request.form
    inspector_id = str(payload.get('inspector_id') or '').strip()
    record = LifecycleController(get_store()).reassign_for_revisit(inspection_id, inspector_id)
    current_app.logger.info("%s sent inspection %s for revisit to %s",
                            get_current_user()['id'], inspection_id, inspector_id)
    return success_resp('Inspection assigned for revisit successfully', record)


@inspections_bp.route('/<inspection_id>/delete', methods=['POST'])
@require_supervisor
def delete_inspection(inspection_id):
    LifecycleController(get_store()).delete_inspection_record(inspection_id)
    current_app.logger.info("%s deleted inspection %s", get_current_user()['id'], inspection_id)
    return success_resp('Inspection deleted successfully', {'id': inspection_id})
