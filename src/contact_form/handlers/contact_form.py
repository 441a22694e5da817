"""Handles contact form submissions."""
import logging

from ..config import ContactFormConfig
from ..models.email import DispatchResult, OutboundMessage
from ..models.recipient import RecipientRecord
from ..models.submission import Submission
from ..repositories.recipient_repo import RecipientRepository
from ..services.altcha_service import AltchaService
from ..services.notifier_service import NotifierService


class ContactFormHandler:
    """
    ContactFormHandler validates a submission, resolves the topic recipients and
    sends the enquiry notification.

    Every failure after configuration is absorbed and reported as False, so the
    caller cannot tell which step rejected the submission.
    """
    def __init__(
            self,
            config: ContactFormConfig,
            recipient_repo: RecipientRepository,
            altcha_service: AltchaService,
            notifier_service: NotifierService,
    ):
        """
        Initialize the ContactFormHandler class

        Args:
            config (ContactFormConfig): The application configuration.
            recipient_repo (RecipientRepository): Lookup of recipients by topic.
            altcha_service (AltchaService): Bot-defense verification.
            notifier_service (NotifierService): Builds and sends the notification.
        """
        self.config = config
        self.recipient_repo = recipient_repo
        self.altcha_service = altcha_service
        self.notifier_service = notifier_service

    def handle(self, submission: Submission) -> bool:
        """
        Process a submission end to end.

        Args:
            submission (Submission): The validated form submission.

        Returns:
            bool: True if the email was accepted for sending, False otherwise.
        """
        if not self.altcha_service.verify(submission.altcha):
            logging.warning("ContactFormHandler.handle: ALTCHA verification failed. Rejecting submission.")
            return False

        recipients: tuple[str, ...] | None = self.resolve_recipients(submission.topic)
        if not recipients:
            return False

        message: OutboundMessage | None = self.notifier_service.build_message(
            submission=submission,
            recipients=recipients,
            bcc_recipient=self.config.bcc_recipient,
        )
        if message is None:
            logging.error(f"ContactFormHandler.handle: Could not build message for topic '{submission.topic}'.")
            return False

        result: DispatchResult = self.notifier_service.send_email(message)
        if not result.accepted:
            logging.error(f"ContactFormHandler.handle: Email send failed: {result.reason}")
            return False

        logging.info(f"ContactFormHandler.handle: Enquiry for topic '{submission.topic}' accepted for sending.")
        return True

    def resolve_recipients(self, topic: str) -> tuple[str, ...] | None:
        """
        Resolve the recipient addresses for a topic.

        Args:
            topic (str): The topic key.

        Returns:
            tuple[str, ...] | None: The addresses, or None if the topic has no record or no addresses.
        """
        record: RecipientRecord | None = self.recipient_repo.get_recipients(topic)

        if record is None:
            logging.warning(f"ContactFormHandler.resolve_recipients: Unknown topic '{topic}'.")
            return None

        if not record.emails:
            logging.warning(f"ContactFormHandler.resolve_recipients: Topic '{topic}' has no recipient addresses.")
            return None

        return record.emails
