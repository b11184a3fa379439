"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specmock.exceptions.SpecmockError` subclass.
Shell wrappers and CI scripts can inspect the exit code of
``specmock resolve`` to tell a missing example apart from a broken document.

Example::

    $ specmock resolve petstore.yaml /418/pets
    $ echo $?
    4   # EXIT_NOT_FOUND -- no example for that request
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_NOT_FOUND = 4
"""No example could be resolved for the request (served as HTTP 404)."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI document could not be loaded, parsed, or validated."""

EXIT_SERVER_ERROR = 8
"""The mock server could not bind or start."""
