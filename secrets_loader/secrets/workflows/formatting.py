"""Output formatting for created secrets."""
import json
import re

from ..domains.models import PublishResult

_SEPARATORS = re.compile(r"[ \-_]")
_DISALLOWED = re.compile(r"[^A-Z0-9_]")


def _upper_char(c: str) -> str:
    # Characters whose uppercase form is several characters (ß, ligatures) stay as-is
    upper = c.upper()
    return upper if len(upper) == 1 else c


def derive_variable_name(name: str) -> str:
    """
    Derive an environment variable name from a secret name.

    Only the part after the last "/" is used. It is uppercased, spaces and
    hyphens become underscores, and anything that is not A-Z, 0-9 or "_"
    is dropped: "prod/db/My Secret-1" -> "MY_SECRET_1".

    Applying it to its own output returns the output unchanged.
    """
    name = name.rsplit("/", 1)[-1]
    name = _SEPARATORS.sub("_", "".join(_upper_char(c) for c in name))
    return _DISALLOWED.sub("", name)


def format_task_definition(result: PublishResult) -> str:
    """
    Render a result as one element of an ECS task definition "secrets" list.

    Returns:
        Compact JSON object with "name" and "valueFrom" keys
    """
    return json.dumps(
        {"name": derive_variable_name(result.name), "valueFrom": result.identifier},
        separators=(",", ":"),
    )


def format_result(result: PublishResult, task_definition: bool = False) -> str:
    """Render a result as a single output line (without newline)."""
    if task_definition:
        return format_task_definition(result)
    return result.identifier
