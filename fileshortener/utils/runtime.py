"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if the application runs in a local development environment, False otherwise.

Example:
    >>> from fileshortener.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['APP_ENV'] = 'prod'
    >>> running_locally()
    False
"""

import os

from fileshortener.constants import ENV


def running_locally() -> bool:
    """Return True if APP_ENV is 'local' (the default), False otherwise."""
    return os.getenv(ENV.App.APP_ENV, 'local').lower() == 'local'
