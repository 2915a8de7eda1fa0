"""Built-in ``jsonref`` sub-commands.

* :mod:`~jsonreference.commands.inspect` -- ``jsonref inspect``.
* :mod:`~jsonreference.commands.resolve` -- ``jsonref resolve``.
"""

from jsonreference.commands.inspect import inspect_command
from jsonreference.commands.resolve import resolve_command

__all__ = ["inspect_command", "resolve_command"]
