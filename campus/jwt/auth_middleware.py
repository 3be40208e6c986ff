from functools import wraps

from campus.exceptions.exceptions import UnauthenticatedError


def get_current_user(info):
    """Caller identity resolved from the bearer token, or None"""
    return info.context.get("user")


def login_required(resolver):
    """Decorator to require a valid bearer token on a GraphQL resolver"""
    @wraps(resolver)
    def decorated_function(obj, info, **kwargs):
        if get_current_user(info) is None:
            raise UnauthenticatedError("UNAUTHENTICATED")
        return resolver(obj, info, **kwargs)
    return decorated_function
