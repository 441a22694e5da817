"""Service for sending enquiry emails using Azure Communication Service (ACS)."""
import logging
import pathlib

from azure.communication.email import EmailClient
from azure.core.exceptions import AzureError, HttpResponseError, ServiceRequestError
from azure.identity import DefaultAzureCredential
from jinja2 import Environment, FileSystemLoader, Template, TemplateError, select_autoescape
from pydantic import ValidationError

from ..config import TEMPLATE_FILE_NAME, ContactFormConfig
from ..models.email import DispatchResult, OutboundMessage
from ..models.submission import Submission
from ..utils.formatting import nl2br
from ..utils.validation import normalize_email_address

SUBJECT_PREFIX = "Website Enquiry"


def create_email_client(config: ContactFormConfig) -> EmailClient:
    """
    Create an email client using the ACS connection string or endpoint.

    Args:
        config (ContactFormConfig): The application configuration.

    Returns:
        EmailClient: The initialized email client.
    """
    if config.acs_connection_string:
        logging.debug("Using ACS Connection String.")
        email_client: EmailClient = EmailClient.from_connection_string(config.acs_connection_string)
    else:
        logging.debug("Using ACS Endpoint and DefaultAzureCredential.")
        credential: DefaultAzureCredential = DefaultAzureCredential()
        # noinspection PyTypeChecker
        email_client: EmailClient = EmailClient(endpoint=config.acs_endpoint, credential=credential)

    return email_client


class NotifierService:
    """Service for building and sending enquiry notifications."""

    def __init__(self, sender_address: str, email_client: EmailClient | None, disable_email: bool = False):
        self.sender_address = sender_address
        self.email_client = email_client
        self.disable_email = disable_email

        template_dir = pathlib.Path(__file__).parent.parent / "templates"
        if not template_dir.is_dir():
            logging.error(f"Jinja template directory not found at: {template_dir}")
            raise FileNotFoundError(f"Jinja template directory not found: {template_dir}")

        self.jinja_env: Environment = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "xml", "html.j2"]),
        )
        self.jinja_env.filters["nl2br"] = nl2br

    def build_subject(self, submission: Submission) -> str:
        """
        Build the email subject line.

        Args:
            submission (Submission): The form submission.

        Returns:
            str: e.g. "Website Enquiry: General Enquiry - Jane Smith"
        """
        return f"{SUBJECT_PREFIX}: {submission.formatted_topic} - {submission.full_name}"

    def render_email_body(self, submission: Submission, subject: str) -> str | None:
        """
        Render the HTML email body. All submitted values are HTML-escaped.

        Args:
            submission (Submission): The form submission.
            subject (str): The email subject, used as the heading.

        Returns:
            The rendered email body as a string, or None on failure.
        """
        try:
            template: Template = self.jinja_env.get_template(TEMPLATE_FILE_NAME)
            return template.render(
                heading=subject,
                full_name=submission.full_name,
                email=submission.email,
                topic=submission.formatted_topic,
                subject=submission.subject,
                message=submission.message,
            )
        except TemplateError as render_err:
            logging.error(f"NotifierService.render_email_body: Error rendering template: {render_err}", exc_info=True)
            return None

    def build_message(
            self, submission: Submission, recipients: tuple[str, ...], bcc_recipient: str | None = None
    ) -> OutboundMessage | None:
        """
        Build the notification for a submission.

        The submitter's address is used as reply-to only if it is syntactically valid;
        otherwise it is omitted and the message is still built.

        Args:
            submission (Submission): The form submission.
            recipients (tuple[str, ...]): The resolved topic recipients. Must not be empty.
            bcc_recipient (str | None): Address to blind copy, if any.

        Returns:
            OutboundMessage | None: The message, or None if it could not be built.
        """
        subject: str = self.build_subject(submission)
        html_body: str | None = self.render_email_body(submission, subject)

        if not html_body:
            return None

        reply_to: str | None = normalize_email_address(submission.email)
        if reply_to is None:
            logging.warning("NotifierService.build_message: Submitter email is not valid. Omitting reply-to.")

        try:
            return OutboundMessage(
                subject=subject,
                html_body=html_body,
                to_recipients=recipients,
                reply_to=reply_to,
                bcc_recipient=bcc_recipient or None,
            )
        except ValidationError as e:
            logging.error(f"NotifierService.build_message: Could not build message: {e}")
            return None

    def send_email(self, message: OutboundMessage) -> DispatchResult:
        """
        Hand the message to ACS without waiting for delivery.

        Args:
            message (OutboundMessage): The message to send.

        Returns:
            DispatchResult: accepted=True once ACS has started the send operation.
        """
        if self.disable_email:
            logging.info(
                f"NotifierService.send_email: Email disabled. Skipping send of '{message.subject}' "
                f"to {len(message.to_recipients)} recipient(s)."
            )
            return DispatchResult(accepted=True)

        if self.email_client is None:
            logging.error("NotifierService.send_email: No email client configured.")
            return DispatchResult(accepted=False, reason="Email client is not configured")

        try:
            logging.info(f"NotifierService.send_email: Sending email to {len(message.to_recipients)} recipient(s) via ACS.")
            self.email_client.begin_send(message.to_acs_message(self.sender_address))
        except (HttpResponseError, ServiceRequestError) as acs_sdk_err:
            logging.exception(f"NotifierService.send_email: Azure SDK Error sending email via ACS: {acs_sdk_err}")
            return DispatchResult(accepted=False, reason=str(acs_sdk_err))
        except AzureError as acs_err:
            logging.exception(f"NotifierService.send_email: Failed to send email via ACS: {acs_err}")
            return DispatchResult(accepted=False, reason=str(acs_err))

        logging.info("NotifierService.send_email: ACS send operation started.")
        return DispatchResult(accepted=True)
