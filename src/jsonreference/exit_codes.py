"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~jsonreference.exceptions.JsonReferenceError` subclass.
Shell scripts can inspect the exit code of ``jsonref`` to tell a malformed
reference apart from other failures without parsing stderr.

Example::

    $ jsonref inspect '://bad uri'
    $ echo $?
    3   # EXIT_MALFORMED_REFERENCE
"""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_MALFORMED_REFERENCE = 3
"""A reference string could not be parsed as a URI."""

EXIT_MISSING_CHILD_URL = 4
"""Resolution was attempted with a child reference that carries no URL."""
