"""
Inspection lifecycle - status state machine and transitions.

States:
    draft, planned, in_progress  -> pending (fieldwork not yet handed in)
    submitted                    -> awaiting review
    under_review, rejected       -> reached only through the review workflow
    approved                     -> completed
    reassigned                   -> tracked, shown on its own

Transitions owned here:
    complete_inspection      any state -> approved (administrative override)
    reassign_for_revisit     any state -> in_progress, new inspector
    delete_inspection_record any state -> record and photos removed

Each transition is a single store call. Store failures are surfaced unchanged;
nothing is retried.
"""
import logging
from enum import Enum

from fims.errors import ValidationError
from fims.utils.labels import DEFAULT_LANGUAGE, translate_status

logger = logging.getLogger(__name__)


class Status(str, Enum):
    DRAFT = 'draft'
    PLANNED = 'planned'
    IN_PROGRESS = 'in_progress'
    SUBMITTED = 'submitted'
    UNDER_REVIEW = 'under_review'
    APPROVED = 'approved'
    REJECTED = 'rejected'
    REASSIGNED = 'reassigned'
    # Anything the store hands us that is not one of the above
    UNKNOWN = 'unknown'

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN

    @classmethod
    def parse(cls, raw):
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return cls.UNKNOWN
        return cls(raw)


KNOWN_STATUSES = tuple(s for s in Status if s is not Status.UNKNOWN)

PENDING_STATUSES = frozenset({Status.PLANNED, Status.IN_PROGRESS, Status.DRAFT})
COMPLETED_STATUSES = frozenset({Status.APPROVED})
SUBMITTED_STATUSES = frozenset({Status.SUBMITTED})


class Tier(str, Enum):
    SUCCESS = 'success'
    INFO = 'info'
    NEUTRAL = 'neutral'
    DANGER = 'danger'
    WARN = 'warn'
    DEFAULT = 'default'


STATUS_TIERS = {
    Status.APPROVED: Tier.SUCCESS,
    Status.SUBMITTED: Tier.INFO,
    Status.UNDER_REVIEW: Tier.INFO,
    Status.DRAFT: Tier.NEUTRAL,
    Status.REJECTED: Tier.DANGER,
    Status.REASSIGNED: Tier.WARN,
    Status.PLANNED: Tier.DEFAULT,
    Status.IN_PROGRESS: Tier.DEFAULT,
    Status.UNKNOWN: Tier.DEFAULT,
}


def resolve_status_label(status, lang=DEFAULT_LANGUAGE):
    """Display label for a status.

    Unrecognised values come back upper-cased, e.g. 'on_hold' -> 'ON_HOLD'.
    Never raises.
    """
    parsed = Status.parse(status)
    if parsed is Status.UNKNOWN:
        if status is None:
            return ''
        raw = status.value if isinstance(status, Enum) else str(status)
        return raw.upper()
    return translate_status(parsed.value, lang, default=parsed.value.upper())


def resolve_status_tier(status):
    """Visual tier for a status; unknown values get Tier.DEFAULT."""
    return STATUS_TIERS[Status.parse(status)]


class LifecycleController:
    """Applies status transitions to single inspection records via a store."""

    def __init__(self, store):
        self.store = store

    def complete_inspection(self, inspection_id):
        """Force an inspection to approved, whatever its current state."""
        record = self.store.update_status(inspection_id, Status.APPROVED.value)
        logger.info("Inspection %s completed", inspection_id)
        return record

    def reassign_for_revisit(self, inspection_id, inspector_id):
        """Hand an inspection back for fieldwork under `inspector_id`.

        Raises ValidationError before touching the store when no inspector
        is selected, and before any write when the id names no inspector.
        """
        if not inspector_id or not str(inspector_id).strip():
            raise ValidationError('Please select an inspector for revisit',
                                  inspection_id=inspection_id)

        inspector = self.store.get_inspector(inspector_id)
        if inspector is None:
            raise ValidationError('Inspector {} does not exist'.format(inspector_id),
                                  inspection_id=inspection_id, inspector_id=inspector_id)

        record = self.store.update_status(
            inspection_id, Status.IN_PROGRESS.value,
            {'inspector_id': inspector['id']}
        )
        logger.info("Inspection %s reassigned to %s for revisit",
                    inspection_id, inspector['id'])
        return record

    def delete_inspection_record(self, inspection_id):
        self.store.delete_inspection(inspection_id)
        logger.info("Inspection %s deleted", inspection_id)
