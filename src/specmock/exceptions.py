"""Exception hierarchy for specmock.

All exceptions inherit from :class:`SpecmockError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specmock.exit_codes`.
The top-level error handler in :func:`specmock.app.main` catches
``SpecmockError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

The four resolution errors are raised by :func:`specmock.engine.resolve_example`
and are never fatal: the HTTP boundary maps every one of them to a 404.

Subclass hierarchy::

    SpecmockError (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- NotFoundError           (exit 4)
    |   +-- ResolutionError
    |       +-- PathNotFound
    |       +-- OperationNotFound
    |       +-- ResponseNotFound
    |       +-- ExampleAbsent
    +-- SpecParseError          (exit 7)
    +-- ServerStartError        (exit 8)
    +-- ConfigError             (exit 1)
"""

from typing import Optional

from specmock.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
    EXIT_SPEC_PARSE_ERROR,
)


class SpecmockError(Exception):
    """Base exception for all specmock errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`specmock.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecmockError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class NotFoundError(SpecmockError):
    """Raised when a request cannot be answered with an example (HTTP 404)."""

    exit_code = EXIT_NOT_FOUND


class ResolutionError(NotFoundError):
    """Base class for the stage-specific failures of the resolution engine.

    ``stage`` names the engine stage that gave up. It is meant for logs only;
    clients of the mock server always see a plain 404.
    """

    stage: str = "resolution"


class PathNotFound(ResolutionError):
    """No path template in the document matches the request path."""

    stage = "path"


class OperationNotFound(ResolutionError):
    """The path matched but the document defines no operation for the method."""

    stage = "operation"


class ResponseNotFound(ResolutionError):
    """The status code is not declared, or its ``$ref`` chain is broken or too deep."""

    stage = "response"


class ExampleAbsent(ResolutionError):
    """The response has no usable example for the requested media type."""

    stage = "example"


class SpecParseError(SpecmockError):
    """Raised when the OpenAPI document cannot be parsed or fails validation."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class ServerStartError(SpecmockError):
    """Raised when the HTTP listener cannot bind to the requested address."""

    exit_code = EXIT_SERVER_ERROR


class ConfigError(SpecmockError):
    """Raised for configuration problems (invalid project file, bad port value)."""

    exit_code = EXIT_GENERIC_FAILURE
