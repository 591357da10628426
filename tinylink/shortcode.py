"""Short code generation utilities."""

import random
import re
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate and validate short codes."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_uppercase + string.ascii_lowercase + string.digits

    MIN_CUSTOM_LENGTH = 6
    MAX_CUSTOM_LENGTH = 8

    _CODE_PATTERN = re.compile(r"[A-Za-z0-9]{6,8}")

    def __init__(self, default_length: int = 6, rng: Optional[random.Random] = None):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            rng: Entropy source (defaults to the OS-backed SystemRandom)
        """
        self.default_length = default_length
        self.rng = rng or random.SystemRandom()

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Every character is drawn uniformly from the 62-character alphabet.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(self.rng.choice(self.BASE62_CHARS) for _ in range(length))

    @classmethod
    def is_valid_format(cls, code) -> bool:
        """Check that a custom code is 6 to 8 alphanumeric characters."""
        if not isinstance(code, str):
            return False
        return cls._CODE_PATTERN.fullmatch(code) is not None
