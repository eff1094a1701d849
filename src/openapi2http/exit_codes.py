"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~openapi2http.exceptions.Openapi2HttpError` subclass.
Shell wrappers and editor tasks can inspect the exit code to tell a bad
input file apart from an unexpected crash without parsing stderr.

Example::

    $ openapi2http convert package.json
    $ echo $?
    8   # EXIT_UNSUPPORTED_FILE -- not an API description
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_SPEC_PARSE_ERROR = 7
"""The source document could not be decoded as JSON or YAML."""

EXIT_UNSUPPORTED_FILE = 8
"""The source file is a known non-API file or has an unsupported extension."""

EXIT_MISSING_PATHS = 9
"""The decoded document has no usable ``paths`` mapping."""

EXIT_UNRECOGNIZED_VERSION = 11
"""Neither the OpenAPI 3.x nor the Swagger 2.0 signature was found."""
