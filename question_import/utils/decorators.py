from functools import wraps
from flask import jsonify
from flask_jwt_extended import jwt_required, get_jwt


def is_admin_claims(claims):
    """Tokens from the auth provider mark admins with `admin: true` or `role: admin`."""
    return claims.get('admin') is True or claims.get('role') == 'admin'


def admin_required(f):
    """Decorator for admin-only routes"""
    @wraps(f)
    @jwt_required()
    def decorated_function(*args, **kwargs):
        claims = get_jwt()

        if not is_admin_claims(claims):
            return jsonify({
                'error': 'Access denied. Admin privileges required.'
            }), 403

        return f(*args, **kwargs)

    return decorated_function
