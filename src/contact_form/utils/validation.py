"""Validation utilities for submitted values."""
import logging

from email_validator import EmailNotValidError, validate_email


def normalize_email_address(address: str | None) -> str | None:
    """
    Checks the syntax of an email address.

    No DNS lookups are made; only the address syntax is validated.

    Args:
        address: The address to check.

    Returns:
        The normalized address if it is syntactically valid, None otherwise.
    """
    if not address or not address.strip():
        return None

    try:
        result = validate_email(address.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        logging.warning(f"Email address failed syntax validation: {e}")
        return None

    return result.normalized
