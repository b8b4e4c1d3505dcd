from functools import wraps
from flask import current_app
from flask_jwt_extended import get_jwt, verify_jwt_in_request

from bulk_user_admin.security import AdminCapability
from bulk_user_admin.utils.api_helper import error


def require_sections(*allowed_sections: str, require_all: bool = False):
    """
    Decorator to enforce section-based access using flask_jwt_extended.

    The caller's ``sections`` claim is turned into an AdminCapability which
    is passed to the view as its first positional argument.

    Args:
        allowed_sections: Section aliases allowed to access the route. When
                          omitted, the configured ADMIN_SECTION is required.
        require_all: If True, all sections must be present in the JWT.
                     If False, any one of them is sufficient.

    Example:
        @require_sections()
        @require_sections('users', 'settings', require_all=True)
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            required = allowed_sections or (current_app.config.get('ADMIN_SECTION', 'users'),)
            current_app.logger.debug(
                f"🔐 Checking access. Required sections: {required}, require_all={require_all}"
            )
            verify_jwt_in_request()
            jwt_data = get_jwt()
            user_id = jwt_data.get('sub', 'unknown')
            user_sections = jwt_data.get('sections', [])

            if not user_sections:
                current_app.logger.warning(
                    f"❌ Access denied. User {user_id} has no sections.")
                return error('Unauthorized - No sections found', 401, code='unauthorized')

            if require_all:
                has_access = all(s in user_sections for s in required)
            else:
                has_access = any(s in user_sections for s in required)

            if not has_access:
                current_app.logger.warning(
                    f"🚫 Forbidden. User {user_id} sections: {user_sections}, required: {required}"
                )
                return error('Forbidden: insufficient permissions', 403, code='forbidden')

            current_app.logger.debug(f"✅ Access granted to user {user_id}")
            capability = AdminCapability(actor_id=str(user_id), sections=frozenset(user_sections))
            return func(capability, *args, **kwargs)

        return wrapper
    return decorator
