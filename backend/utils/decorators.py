import logging
from functools import wraps

from config import Config
from flask import jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity, jwt_required

logger = logging.getLogger(__name__)


def current_actor() -> tuple[int, str | None]:
    """Authenticated user ID and role from the verified JWT."""
    return int(get_jwt_identity()), get_jwt().get(Config.JWT_ROLE_CLAIM)


def role_required(role: str):
    """Decorator to require a JWT whose role claim matches `role`.

    Args:
        role: Required role ("client" or "worker")
    """

    def decorator(f):
        @wraps(f)
        @jwt_required()
        def decorated_function(*args, **kwargs):
            user_id, actor_role = current_actor()
            if actor_role != role:
                logger.warning(f"User {user_id} with role {actor_role} denied {f.__name__}")
                return jsonify({"error": f"Access denied. {role.capitalize()} only route."}), 403
            return f(*args, **kwargs)

        return decorated_function

    return decorator


worker_required = role_required("worker")
