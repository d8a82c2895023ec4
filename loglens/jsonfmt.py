"""JSON detection and pretty-printing for a single log line."""

import json


def _reject_constant(name: str):
    raise ValueError(f"Invalid JSON constant: {name}")


def _load(line: str):
    # NaN/Infinity are not JSON
    return json.loads(line, parse_constant=_reject_constant)


def is_well_formed(line: str) -> bool:
    """Return True if ``line`` parses as a JSON document."""
    try:
        _load(line)
    except ValueError:
        return False
    return True


def pretty_print(line: str) -> str:
    """Return ``line`` re-encoded as indented, key-sorted JSON.

    Raises:
        ValueError: if ``line`` is not valid JSON.
    """
    return json.dumps(_load(line), indent=2, sort_keys=True, ensure_ascii=False)
