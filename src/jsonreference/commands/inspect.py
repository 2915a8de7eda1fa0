"""Inspect command -- show how a JSON Reference is parsed and classified.

``jsonref inspect REF`` prints the normalized form of the reference, its URL
parts, the JSON Pointer taken from the fragment, the shape flags and the
canonical/root predicates.  In JSON mode the report is the
:class:`~jsonreference.models.ReferenceInfo` model as an object.
"""

from __future__ import annotations

import typer

from jsonreference.exceptions import JsonReferenceError
from jsonreference.models import ReferenceInfo
from jsonreference.output import OutputFormat, debug, error, get_output, warning
from jsonreference.reference import parse


def _display(value: object) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value) if value != "" else "-"


def inspect_command(
    reference: str = typer.Argument(..., help="JSON reference to inspect."),
) -> None:
    """Show the parts and classification of a JSON reference.

    Example::

        jsonref inspect 'http://example.com/schema.json#/definitions/Pet'
        jsonref --json inspect '#/definitions/Pet'
    """
    try:
        ref = parse(reference)
    except JsonReferenceError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    debug(f"Parsed {reference!r} as {ref!r}")
    if ref.url is not None and ref.url.fragment and not ref.pointer.path:
        warning(
            f"Fragment {ref.url.fragment!r} is not a JSON pointer; "
            "the reference points at the whole document"
        )
    report = ReferenceInfo.from_reference(ref)

    output = get_output()
    if output.format == OutputFormat.JSON:
        output.format_response(report.model_dump())
        return

    rows = [[name, _display(value)] for name, value in report.model_dump().items()]
    output.print_table(["Property", "Value"], rows, title=f"Reference {report.reference or '(empty)'}")
