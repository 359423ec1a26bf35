"""
Authentication decorators and utilities.
Centralized auth for all routes.

Role Hierarchy (highest to lowest):
- admin: Full access to everything
- supervisor: Complete, reassign for revisit, delete inspections
- inspector: Sees and works on assigned inspections only
"""
from functools import wraps
from flask import session, redirect, url_for, abort


# Role hierarchy - higher index = more permissions
ROLE_HIERARCHY = {
    'inspector': 1,
    'supervisor': 2,
    'admin': 3
}

# Dashboard actions and the minimum role that may invoke them
ACTION_ROLES = {
    'view': 'inspector',
    'photos': 'inspector',
    'complete': 'supervisor',
    'revisit': 'supervisor',
    'delete': 'supervisor',
}


def get_role_level(role):
    """Get numeric level for role comparison."""
    return ROLE_HIERARCHY.get(role, 0)


def available_actions(user_role):
    """Actions the role may take on an inspection row, in display order."""
    level = get_role_level(user_role)
    return [action for action, minimum in ACTION_ROLES.items()
            if level >= get_role_level(minimum)]


def require_auth(f):
    """Require any authenticated user."""
    @wraps(f)
    def decorated(*args, **kwargs):
        if 'user_id' not in session:
            return redirect(url_for('login'))
        return f(*args, **kwargs)
    return decorated


def require_role(minimum_role):
    """
    Decorator factory for role-based access.
    Usage: @require_role('supervisor')
    """
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            if 'user_id' not in session:
                return redirect(url_for('login'))

            user_role = session.get('role', 'inspector')
            if get_role_level(user_role) < get_role_level(minimum_role):
                abort(403)
            return f(*args, **kwargs)
        return decorated
    return decorator


require_supervisor = require_role('supervisor')


def get_current_user():
    """Get current user info from session."""
    if 'user_id' not in session:
        return None
    return {
        'id': session.get('user_id'),
        'name': session.get('user_name'),
        'role': session.get('role'),
    }
