"""Join code generator for private study groups.

Join codes are 8 characters drawn uniformly from uppercase letters and
digits (36 symbols), e.g. ``K7Q2ZB0M``.
"""

import re
import secrets
import string
from typing import Iterable


class JoinCodeExhaustedError(Exception):
    """Raised when no unused join code could be drawn."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Could not generate an unused join code after {attempts} attempts")


class JoinCodeGenerator:
    """Generator for random private-group join codes."""

    ALPHABET = string.ascii_uppercase + string.digits
    LENGTH = 8
    PATTERN = re.compile(r"^[A-Z0-9]{8}$")
    MAX_ATTEMPTS = 20

    @classmethod
    def validate(cls, join_code: str) -> bool:
        """Validate that a join code has the expected shape.

        Examples:
            >>> JoinCodeGenerator.validate("AB12CD34")
            True
            >>> JoinCodeGenerator.validate("ab12cd34")
            False
        """
        if not isinstance(join_code, str):
            return False
        return bool(cls.PATTERN.match(join_code))

    @classmethod
    def generate(cls, existing_codes: Iterable[str] | None = None) -> str:
        """Generate a join code not present in ``existing_codes``.

        Each character is drawn independently with ``secrets.choice``.

        Args:
            existing_codes: Codes already in use.

        Returns:
            A new join code.

        Raises:
            JoinCodeExhaustedError: If every draw collided.
        """
        existing_set = set(existing_codes) if existing_codes else set()

        for _ in range(cls.MAX_ATTEMPTS):
            code = "".join(secrets.choice(cls.ALPHABET) for _ in range(cls.LENGTH))
            if code not in existing_set:
                return code

        raise JoinCodeExhaustedError(cls.MAX_ATTEMPTS)
