"""Exception hierarchy for openapi2http.

All exceptions inherit from :class:`Openapi2HttpError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`openapi2http.exit_codes`.
The top-level error handler in :func:`openapi2http.app.main` catches
``Openapi2HttpError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Every error here is fatal to the current conversion only; nothing is
retried, since the pipeline is deterministic for a given document.

Subclass hierarchy::

    Openapi2HttpError (exit 1)
    +-- InvalidUsageError         (exit 2)
    +-- SpecParseError            (exit 7)
    +-- UnsupportedFileError      (exit 8)
    +-- MissingPathsError         (exit 9)
    +-- UnrecognizedVersionError  (exit 11)
    +-- ConfigError               (exit 1)
"""

from openapi2http.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_MISSING_PATHS,
    EXIT_SPEC_PARSE_ERROR,
    EXIT_UNRECOGNIZED_VERSION,
    EXIT_UNSUPPORTED_FILE,
)


class Openapi2HttpError(Exception):
    """Base exception for all openapi2http errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`openapi2http.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(Openapi2HttpError):
    """Raised for invalid CLI arguments or conflicting options."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(Openapi2HttpError):
    """Raised when the source document cannot be read or decoded as JSON/YAML."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class UnsupportedFileError(Openapi2HttpError):
    """Raised when a file is a known non-API config file or has an unsupported extension."""

    exit_code = EXIT_UNSUPPORTED_FILE


class MissingPathsError(Openapi2HttpError):
    """Raised when the decoded document lacks a ``paths`` mapping."""

    exit_code = EXIT_MISSING_PATHS


class UnrecognizedVersionError(Openapi2HttpError):
    """Raised when the document is neither OpenAPI 3.x nor Swagger 2.0."""

    exit_code = EXIT_UNRECOGNIZED_VERSION


class ConfigError(Openapi2HttpError):
    """Raised for configuration problems (invalid JSON, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE
