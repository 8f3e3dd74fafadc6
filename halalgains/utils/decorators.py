# halalgains/utils/decorators.py
from functools import wraps
from flask import jsonify
from flask_jwt_extended import get_jwt_identity, jwt_required
from halalgains.extensions import db
from halalgains.models.user import User


def role_required(*roles):
    """
    Require a valid JWT and, when roles are given, one of those roles.
    The resolved user is passed to the view as the `current_user` keyword.
    """
    def decorator(view_func):
        @wraps(view_func)
        @jwt_required()
        def wrapper(*args, **kwargs):
            user = db.session.get(User, int(get_jwt_identity()))
            if not user:
                return jsonify({"msg": "User not found"}), 401

            if roles and user.role not in roles:
                return jsonify({"msg": "Unauthorized"}), 403

            kwargs['current_user'] = user
            return view_func(*args, **kwargs)
        return wrapper
    return decorator


login_required = role_required()
client_required = role_required("client")
coach_required = role_required("coach")
