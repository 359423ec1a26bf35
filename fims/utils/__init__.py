"""
Shared utilities for FIMS.
"""
import uuid


def generate_id(prefix=None):
    """Generate short UUID for database records.

    Args:
        prefix: Optional prefix for the ID (e.g., 'insp', 'cat', 'photo')

    Returns:
        String ID like 'insp-a1b2c3d4' or just 'a1b2c3d4' if no prefix
    """
    short_uuid = str(uuid.uuid4())[:8]
    if prefix:
        return f"{prefix}-{short_uuid}"
    return short_uuid


def generate_inspection_number(sequence, year):
    """Human-readable inspection number, e.g. 'INS-2026-0007'."""
    return f"INS-{year}-{sequence:04d}"
