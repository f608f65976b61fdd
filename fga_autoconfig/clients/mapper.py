"""Copy-if-present assignment onto SDK configuration objects.

``map_field`` is the single rule every mapped field goes through: if the
source value passes its predicate it is (optionally) transformed and
assigned, otherwise the target keeps whatever default it already had.
Absent values are never written as ``None``/``0``.
"""

from collections.abc import Callable
from operator import attrgetter
from typing import Any


def is_not_none(value: Any) -> bool:
    return value is not None


def has_text(value: Any) -> bool:
    """True for strings containing at least one non-whitespace character."""
    return isinstance(value, str) and value.strip() != ""


def map_field(
    value: Any,
    target: Any,
    attribute: str,
    *,
    when: Callable[[Any], bool] = is_not_none,
    transform: Callable[[Any], Any] | None = None,
) -> bool:
    """Assign ``value`` to ``target.<attribute>`` if ``when(value)`` holds.

    Args:
        value: Source value from the configuration record.
        target: Object receiving the value.
        attribute: Attribute name; dotted paths (``retry_params.max_retry``)
            assign on the nested object.
        when: Presence predicate. Defaults to "not None".
        transform: Optional conversion applied before assignment.

    Returns:
        True if the target was modified.
    """
    if not when(value):
        return False

    if transform is not None:
        value = transform(value)

    owner_path, _, name = attribute.rpartition(".")
    owner = attrgetter(owner_path)(target) if owner_path else target
    setattr(owner, name, value)
    return True
