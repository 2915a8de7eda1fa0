"""Exception hierarchy for jsonreference.

All recoverable errors inherit from :class:`JsonReferenceError`, which carries
an ``exit_code`` attribute mapped to a constant from
:mod:`jsonreference.exit_codes`. The top-level handler in
:func:`jsonreference.app.main` catches ``JsonReferenceError`` and exits with
the appropriate code, while unexpected exceptions produce a crash log and
exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    JsonReferenceError (exit 1)
    +-- MalformedReferenceError  (exit 3)
    +-- MissingChildURLError     (exit 4)
    +-- ConfigError              (exit 1)

:class:`ReferenceFault` sits outside that hierarchy on purpose: it is raised
by :func:`~jsonreference.reference.must_parse` when a reference that the
caller declared valid turns out not to be, which is a programming error
rather than a runtime condition.
"""

from __future__ import annotations

from jsonreference.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_MALFORMED_REFERENCE,
    EXIT_MISSING_CHILD_URL,
)


class JsonReferenceError(Exception):
    """Base exception for all jsonreference errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class MalformedReferenceError(JsonReferenceError):
    """Raised when a reference string is rejected by the URI grammar.

    Args:
        reference: The raw string that failed to parse.
        reason: Short description of what the URI parser rejected.
    """

    exit_code = EXIT_MALFORMED_REFERENCE

    def __init__(self, reference: str, reason: str):
        super().__init__(f"Malformed JSON reference {reference!r}: {reason}")
        self.reference = reference
        self.reason = reason


class MissingChildURLError(JsonReferenceError):
    """Raised when a child reference without a URL is resolved against a parent."""

    exit_code = EXIT_MISSING_CHILD_URL


class ConfigError(JsonReferenceError):
    """Raised for configuration problems (invalid ``jsonref.json``, bad env values)."""

    exit_code = EXIT_GENERIC_FAILURE


class ReferenceFault(RuntimeError):
    """Raised by :func:`~jsonreference.reference.must_parse` for an invalid reference."""
