"""
Application-wide constants.

This module centralizes the magic strings and numbers used throughout the
application to improve maintainability and reduce duplication.
"""


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    OK = 200
    CREATED = 201
    NO_CONTENT = 204

    # Client Errors
    BAD_REQUEST = 400
    NOT_FOUND = 404
    CONFLICT = 409

    # Server Errors
    INTERNAL_SERVER_ERROR = 500


class ServerConfig:
    """Server configuration defaults"""

    HOST = "0.0.0.0"
    PORT = 8888


class Pagination:
    """Paging defaults applied when configuration does not override them"""

    DEFAULT_PAGE = 1
    DEFAULT_PAGE_SIZE = 10
    MAX_PAGE_SIZE = 100


class MovieLimits:
    """Field limits for the movie resource"""

    TITLE_MAX_LENGTH = 200
    GENRE_MAX_LENGTH = 50
    DESCRIPTION_MAX_LENGTH = 2000
    DURATION_MIN_MINUTES = 1
    DURATION_MAX_MINUTES = 600


RESOURCE_PREFIX = "/resource"
MEMORY_DATABASE_URL = "memory://"
