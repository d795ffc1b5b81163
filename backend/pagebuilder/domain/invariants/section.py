import json
from typing import Any, Dict
from .exceptions import InvariantViolation


def assert_section_entry(entry: Any, position: int) -> Dict[str, Any]:
    """
    Validates one submitted page-section entry and returns it as a dict.

    Accepted shapes:
    - {"id": <section definition id>, "order"?: int}   attach a new section
    - {"uuid": <association uuid>, "data"?: {...}, "order"?: int}   update one

    Editors may post entries JSON-encoded, so strings are decoded first.
    """
    if isinstance(entry, str):
        try:
            entry = json.loads(entry)
        except ValueError as exc:
            raise InvariantViolation(f"Section entry {position} is not valid JSON.") from exc

    if not isinstance(entry, dict):
        raise InvariantViolation(f"Section entry {position} must be an object.")

    if not entry.get("uuid") and not entry.get("id"):
        raise InvariantViolation(
            f"Section entry {position} needs either a 'uuid' or a section 'id'."
        )

    order = entry.get("order")
    if order is not None and (isinstance(order, bool) or not isinstance(order, int)):
        raise InvariantViolation(f"Section entry {position} has a non-integer order: {order!r}")

    data = entry.get("data")
    if data is not None and not isinstance(data, dict):
        raise InvariantViolation(f"Section entry {position} data must be an object.")

    return entry


def assert_unique_uuids(entries) -> None:
    seen = set()
    for entry in entries:
        uuid = entry.get("uuid")
        if not uuid:
            continue
        if uuid in seen:
            raise InvariantViolation(f"Page section {uuid} was submitted more than once.")
        seen.add(uuid)
