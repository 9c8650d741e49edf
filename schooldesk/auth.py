from functools import wraps
from flask import current_app, jsonify, request
from flask_login import UserMixin, current_user
from schooldesk import login_manager

ROLES = ('admin', 'teacher', 'student', 'parent')


class Identity(UserMixin):
    """Request-scoped caller identity supplied by the auth collaborator"""

    def __init__(self, id, role, name=None, class_id=None):
        self.id = str(id)
        self.role = role
        self.name = name
        self.class_id = class_id

    @property
    def is_admin(self):
        return self.role == 'admin'

    def __repr__(self):
        return f'<Identity {self.id} ({self.role})>'


def _int_or_none(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@login_manager.request_loader
def load_identity_from_request(req):
    user_id = req.headers.get('X-User-Id')
    role = (req.headers.get('X-User-Role') or '').lower()
    if user_id and role in ROLES:
        return Identity(user_id, role, class_id=_int_or_none(req.headers.get('X-User-Class')))

    default = current_app.config.get('DEFAULT_IDENTITY')
    if default:
        return Identity(default['id'], default['role'], name=default.get('name'),
                        class_id=default.get('class_id'))
    return None


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({'error': 'Authentication required'}), 401


def role_required(*roles):
    """Reject callers whose role is not in roles (use after login_required)"""
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            if current_user.role not in roles:
                current_app.logger.warning(
                    f"Identity {current_user.id} ({current_user.role}) denied access to {request.path}"
                )
                return jsonify({'error': 'Unauthorized'}), 403
            return view(*args, **kwargs)
        return wrapped
    return decorator
