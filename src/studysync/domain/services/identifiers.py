"""Record identifier helpers.

All records are keyed by UUID strings.
"""

import uuid


def new_id() -> str:
    """Generate a new record identifier."""
    return str(uuid.uuid4())


def is_valid_id(value: object) -> bool:
    """Check that ``value`` is a well-formed record identifier.

    Examples:
        >>> is_valid_id("0b6e4b1a-3c1e-4c53-9d0e-8f7a2b1c4d5e")
        True
        >>> is_valid_id("not-an-id")
        False
    """
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True
