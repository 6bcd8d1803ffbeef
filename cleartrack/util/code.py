"""Short numeric code generation for invites and practitioner codes."""

import secrets

DIGITS = "0123456789"

CLIENT_INVITE_CODE_LENGTH = 6


def generate_code(length: int = CLIENT_INVITE_CODE_LENGTH) -> str:
    """Generate a random decimal code.

    Codes are short-lived secrets typed in by people, not key material.

    Args:
        length: Number of digits

    Returns:
        String of ``length`` uniformly sampled digits

    Raises:
        ValueError: If length is not positive
    """
    if length < 1:
        raise ValueError("Code length must be at least 1")
    return "".join(secrets.choice(DIGITS) for _ in range(length))
