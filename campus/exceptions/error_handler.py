"""Centralized error handling for GraphQL responses"""
from typing import Optional

from graphql import GraphQLError

from campus.exceptions.exceptions import CampusError
from campus.logging_logs.log_config import get_logger

logger = get_logger("errors")

SERVER_ERROR_MESSAGE = "Server error"


def unwrap_error(error: GraphQLError) -> Optional[Exception]:
    """Return the exception a resolver raised, None for query/validation errors"""
    original = error.original_error
    while isinstance(original, GraphQLError) and original.original_error is not None:
        original = original.original_error
    if isinstance(original, GraphQLError):
        return None
    return original


def format_graphql_error(error: GraphQLError, debug: bool = False) -> dict:
    """
    Ariadne error_formatter.

    Only a human readable message goes on the wire; error kinds are not
    exposed as structured codes.
    """
    formatted = error.formatted
    original = unwrap_error(error)

    if original is None:
        message = formatted["message"]
    elif isinstance(original, CampusError):
        if original.code >= 500:
            logger.error(f"{type(original).__name__} at {error.path}: {original.message}")
            message = SERVER_ERROR_MESSAGE
        else:
            logger.info(f"{type(original).__name__} ({original.code}) at {error.path}: {original.message}")
            message = original.message
    else:
        sanitized_error = str(original).replace('\n', ' ').replace('\r', ' ')[:500]
        logger.error(f"Unexpected error at {error.path}: {sanitized_error}", exc_info=original)
        message = SERVER_ERROR_MESSAGE

    result = {"message": message}
    if formatted.get("locations"):
        result["locations"] = formatted["locations"]
    if formatted.get("path"):
        result["path"] = formatted["path"]
    return result
