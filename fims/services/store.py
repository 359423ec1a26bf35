"""
Record store - SQLite implementation of the inspection store contract.

Rows cross this boundary as plain dicts. Every sqlite3 failure is re-raised as
StoreError; a write that matches no row raises NotFoundError. The store never
retries.
"""
import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone

from fims.errors import NotFoundError, StoreError, ValidationError
from fims.services.db import get_db
from fims.services.lifecycle import KNOWN_STATUSES

logger = logging.getLogger(__name__)

# Columns a status update may carry alongside the new status
UPDATABLE_FIELDS = ('inspector_id', 'inspection_date', 'is_compliant', 'requires_revisit')

VALID_STATUSES = frozenset(s.value for s in KNOWN_STATUSES)


def _now():
    return datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S')


def _decode_form_data(raw):
    if raw is None or raw == '':
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        logger.debug("form_data is not JSON, passing through raw value")
        return raw


def _inspection_from_row(row):
    record = dict(row)
    record['form_data'] = _decode_form_data(record.get('form_data'))
    if record.get('is_compliant') is not None:
        record['is_compliant'] = bool(record['is_compliant'])
    record['requires_revisit'] = bool(record.get('requires_revisit'))
    return record


def _category_from_row(row):
    category = dict(row)
    category['is_active'] = bool(category.get('is_active'))
    return category


class SqliteRecordStore:
    """Inspection store over one open sqlite3 connection."""

    def __init__(self, db):
        self.db = db

    @contextmanager
    def _guard(self, action, **context):
        try:
            yield
        except sqlite3.Error as exc:
            self.db.rollback()
            logger.error("Store %s failed: %s", action, exc)
            raise StoreError('{} failed: {}'.format(action, exc), **context) from exc

    # --- Inspections ---

    def list_inspections(self, actor_id, role=None):
        """All inspections visible to the actor, newest first.

        Inspectors see only the inspections assigned to them; any other role
        sees everything.
        """
        sql = "SELECT * FROM inspection"
        args = []
        if role == 'inspector':
            sql += " WHERE inspector_id = ?"
            args.append(actor_id)
        sql += " ORDER BY created_at DESC, rowid DESC"
        with self._guard('list_inspections', actor_id=actor_id):
            rows = self.db.execute(sql, args).fetchall()
        return [_inspection_from_row(r) for r in rows]

    def get_inspection(self, inspection_id):
        with self._guard('get_inspection', inspection_id=inspection_id):
            row = self.db.execute(
                "SELECT * FROM inspection WHERE id = ?", [inspection_id]
            ).fetchone()
        if row is None:
            raise NotFoundError('Inspection {} not found'.format(inspection_id),
                                inspection_id=inspection_id)
        return _inspection_from_row(row)

    def update_status(self, inspection_id, new_status, extra_fields=None):
        """Set status (plus any allowed extra columns) in one statement."""
        if new_status not in VALID_STATUSES:
            raise ValidationError('Unknown status: {}'.format(new_status),
                                  status=new_status)
        extra_fields = dict(extra_fields or {})
        unknown = set(extra_fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError('Fields not updatable: {}'.format(', '.join(sorted(unknown))))

        columns = ['status = ?', 'updated_at = ?']
        args = [new_status, _now()]
        for field in UPDATABLE_FIELDS:
            if field in extra_fields:
                columns.append('{} = ?'.format(field))
                args.append(extra_fields[field])
        args.append(inspection_id)

        with self._guard('update_status', inspection_id=inspection_id):
            cur = self.db.execute(
                "UPDATE inspection SET {} WHERE id = ?".format(', '.join(columns)), args
            )
            if cur.rowcount == 0:
                self.db.rollback()
                raise NotFoundError('Inspection {} not found'.format(inspection_id),
                                    inspection_id=inspection_id)
            self.db.commit()
        return self.get_inspection(inspection_id)

    def delete_inspection(self, inspection_id):
        """Remove the inspection and its photos. Irreversible."""
        with self._guard('delete_inspection', inspection_id=inspection_id):
            # Delete in order: photos, then the inspection
            self.db.execute("DELETE FROM inspection_photo WHERE inspection_id = ?", [inspection_id])
            cur = self.db.execute("DELETE FROM inspection WHERE id = ?", [inspection_id])
            if cur.rowcount == 0:
                self.db.rollback()
                raise NotFoundError('Inspection {} not found'.format(inspection_id),
                                    inspection_id=inspection_id)
            self.db.commit()

    # --- Reference data ---

    def list_categories(self, active_only=False):
        sql = "SELECT * FROM category"
        if active_only:
            sql += " WHERE is_active = 1"
        sql += " ORDER BY name"
        with self._guard('list_categories'):
            rows = self.db.execute(sql).fetchall()
        return [_category_from_row(r) for r in rows]

    def list_inspectors(self):
        """Active users selectable as reassignment targets."""
        with self._guard('list_inspectors'):
            rows = self.db.execute(
                "SELECT id, name, role FROM inspector WHERE active = 1 ORDER BY name"
            ).fetchall()
        return [dict(r) for r in rows]

    def get_inspector(self, inspector_id):
        """Active inspector by id, or None."""
        with self._guard('get_inspector'):
            row = self.db.execute(
                "SELECT id, name, role FROM inspector WHERE id = ? AND active = 1",
                [inspector_id]
            ).fetchone()
        return dict(row) if row else None

    def list_photos(self, inspection_id):
        with self._guard('list_photos', inspection_id=inspection_id):
            rows = self.db.execute("""
                SELECT * FROM inspection_photo
                WHERE inspection_id = ?
                ORDER BY photo_order
            """, [inspection_id]).fetchall()
        return [dict(r) for r in rows]


def get_store():
    """Record store bound to the current request's connection."""
    return SqliteRecordStore(get_db())
