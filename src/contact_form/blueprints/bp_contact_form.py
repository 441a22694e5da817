"""Blueprint for the website contact form."""
import functools
import logging
from typing import Callable

import azure.functions as func
from pydantic import ValidationError

from ..config import ConfigurationError, ContactFormConfig, get_config
from ..handlers.contact_form import ContactFormHandler
from ..models.submission import ContactFormResponse, Submission
from ..repositories.recipient_repo import RecipientRepository
from ..services.altcha_service import AltchaService
from ..services.notifier_service import NotifierService, create_email_client

bp = func.Blueprint()


def build_handler(config: ContactFormConfig) -> ContactFormHandler:
    """
    Wire up the contact form handler and its Azure clients.

    Args:
        config (ContactFormConfig): The application configuration.

    Returns:
        ContactFormHandler: The handler.
    """
    return ContactFormHandler(
        config=config,
        recipient_repo=RecipientRepository.from_connection_string(
            config.tables_connection_string, config.recipients_table_name
        ),
        altcha_service=AltchaService(config.altcha_url, config.altcha_api_key, timeout=config.altcha_timeout),
        notifier_service=NotifierService(
            sender_address=config.sender_address,
            email_client=None if config.disable_email else create_email_client(config),
            disable_email=config.disable_email,
        ),
    )


@functools.lru_cache(maxsize=1)
def get_handler(config: ContactFormConfig) -> ContactFormHandler:
    """Get the handler for a configuration, building it and its clients on first use."""
    return build_handler(config)


def _json_response(success: bool, status_code: int = 200) -> func.HttpResponse:
    return func.HttpResponse(
        ContactFormResponse(success=success).model_dump_json(),
        mimetype="application/json",
        status_code=status_code,
    )


def process_contact_form(
        req: func.HttpRequest,
        config_loader: Callable[[], ContactFormConfig] = get_config,
        handler_factory: Callable[[ContactFormConfig], ContactFormHandler] = get_handler,
) -> func.HttpResponse:
    """
    Process a contact form request.

    Args:
        req (func.HttpRequest): The incoming HTTP request.
        config_loader: Returns the application configuration.
        handler_factory: Builds the handler from the configuration.

    Returns:
        func.HttpResponse: {"success": bool} with status 200, 400 for an invalid body,
        or 500 if the app is misconfigured.
    """
    # ----- Configuration ----- #
    try:
        config: ContactFormConfig = config_loader()
    except ConfigurationError as e:
        logging.critical(f"ContactForm: Application is misconfigured: {e}")
        return _json_response(False, status_code=500)

    # ----- Parse Submission ----- #
    try:
        submission: Submission = Submission.model_validate(req.get_json())
    except ValidationError as e:
        logging.warning(f"ContactForm: Invalid submission: {e.error_count()} validation error(s).")
        return _json_response(False, status_code=400)
    except ValueError:  # Catches req.get_json() errors
        logging.error("ContactForm: Error processing JSON request: Invalid JSON format.")
        return _json_response(False, status_code=400)

    # ----- Handle ----- #
    try:
        handler: ContactFormHandler = handler_factory(config)
    except ValueError as e:  # Catches malformed connection strings
        logging.critical(f"ContactForm: Could not create Azure clients: {e}")
        return _json_response(False, status_code=500)

    success: bool = handler.handle(submission)

    return _json_response(success)


@bp.route('contactform', methods=['POST'], auth_level='anonymous')
def ContactForm(req: func.HttpRequest) -> func.HttpResponse:
    """
    HTTP trigger for website contact form submissions.

    Args:
        req (func.HttpRequest): The incoming HTTP request.

    Returns:
        func.HttpResponse: The HTTP response.
    """
    return process_contact_form(req)
