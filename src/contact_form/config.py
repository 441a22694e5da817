"""Configuration for the Contact Form function app."""
import functools
import logging
import os
from dataclasses import dataclass
from typing import Mapping

TEMPLATE_FILE_NAME = "enquiry_email.html.j2"
DEFAULT_RECIPIENTS_TABLE_NAME = "Recipients"
DEFAULT_ALTCHA_TIMEOUT = 10.0

TRUTHY_VALUES = ("true", "1", "yes", "on")


class ConfigurationError(ValueError):
    """Raised when a required application setting is missing or invalid."""
    pass


def _get_required_env(environ: Mapping[str, str], var_name: str) -> str:
    """Gets a required environment variable or raises a ConfigurationError."""
    value = environ.get(var_name)
    if value is None or not value.strip():
        raise ConfigurationError(f"Missing required environment variable: '{var_name}'")
    return value.strip()


def _get_optional_env(environ: Mapping[str, str], var_name: str) -> str | None:
    value = environ.get(var_name)
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class ContactFormConfig:
    """
    Settings for the contact form, loaded once per process.

    Either acs_connection_string or acs_endpoint must be set. When only the
    endpoint is set, the email client authenticates with DefaultAzureCredential.
    """
    sender_address: str
    bcc_recipient: str
    altcha_url: str
    altcha_api_key: str
    tables_connection_string: str
    acs_connection_string: str | None = None
    acs_endpoint: str | None = None
    recipients_table_name: str = DEFAULT_RECIPIENTS_TABLE_NAME
    altcha_timeout: float = DEFAULT_ALTCHA_TIMEOUT
    disable_email: bool = False

    def __post_init__(self):
        if not self.acs_connection_string and not self.acs_endpoint:
            raise ConfigurationError(
                "Missing required environment variable: one of 'ACS_CONNECTION_STRING' or 'ACS_ENDPOINT'"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ContactFormConfig":
        """
        Build the configuration from environment variables.

        Args:
            environ (Mapping[str, str] | None): The variables to read. Defaults to os.environ.

        Returns:
            ContactFormConfig: The loaded configuration.

        Raises:
            ConfigurationError: If a required setting is missing or malformed.
        """
        if environ is None:
            environ = os.environ

        timeout_setting: str | None = _get_optional_env(environ, "ALTCHA_TIMEOUT")
        try:
            altcha_timeout = float(timeout_setting) if timeout_setting else DEFAULT_ALTCHA_TIMEOUT
        except ValueError as e:
            raise ConfigurationError(f"Invalid value for 'ALTCHA_TIMEOUT': '{timeout_setting}'") from e

        disable_email_setting: str | None = _get_optional_env(environ, "DISABLE_EMAIL")

        return cls(
            sender_address=_get_required_env(environ, "SENDER_ADDRESS"),
            bcc_recipient=_get_required_env(environ, "BCC_RECIPIENT"),
            altcha_url=_get_required_env(environ, "ALTCHA_URL"),
            altcha_api_key=_get_required_env(environ, "ALTCHA_API_KEY"),
            tables_connection_string=_get_required_env(environ, "TABLES_CONNECTION_STRING"),
            acs_connection_string=_get_optional_env(environ, "ACS_CONNECTION_STRING"),
            acs_endpoint=_get_optional_env(environ, "ACS_ENDPOINT"),
            recipients_table_name=(
                _get_optional_env(environ, "RECIPIENTS_TABLE_NAME") or DEFAULT_RECIPIENTS_TABLE_NAME
            ),
            altcha_timeout=altcha_timeout,
            disable_email=bool(disable_email_setting and disable_email_setting.lower() in TRUTHY_VALUES),
        )


@functools.lru_cache(maxsize=1)
def get_config() -> ContactFormConfig:
    """Load the process-wide configuration from os.environ on first use."""
    config = ContactFormConfig.from_env()
    logging.info(
        f"Configuration loaded. Recipients table: '{config.recipients_table_name}', "
        f"email disabled: {config.disable_email}"
    )
    return config
