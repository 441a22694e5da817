"""Tests for the contact form handler."""
from unittest.mock import MagicMock

from src.contact_form.handlers.contact_form import ContactFormHandler
from src.contact_form.models.email import DispatchResult
from src.contact_form.models.recipient import RecipientRecord
from src.contact_form.models.submission import Submission
from src.contact_form.services.notifier_service import NotifierService


class TestContactFormHandler:

    def setup_method(self):
        self.recipient_repo = MagicMock()
        self.recipient_repo.get_recipients.return_value = RecipientRecord(
            topic="volunteering", emails=("a@x.com", "b@x.com")
        )
        self.altcha_service = MagicMock()
        self.altcha_service.verify.return_value = True
        self.email_client = MagicMock()
        self.notifier_service = NotifierService(sender_address="DoNotReply@example.org", email_client=self.email_client)

    def _handler(self, config) -> ContactFormHandler:
        return ContactFormHandler(
            config=config,
            recipient_repo=self.recipient_repo,
            altcha_service=self.altcha_service,
            notifier_service=self.notifier_service,
        )

    def test_valid_submission_is_sent_once_to_resolved_recipients(self, config, submission):
        assert self._handler(config).handle(submission) is True

        self.recipient_repo.get_recipients.assert_called_once_with("volunteering")
        self.email_client.begin_send.assert_called_once()
        acs_message = self.email_client.begin_send.call_args.args[0]
        assert {r["address"] for r in acs_message["recipients"]["to"]} == {"a@x.com", "b@x.com"}
        assert acs_message["recipients"]["bcc"] == [{"address": "archive@example.org"}]
        assert acs_message["replyTo"] == [{"address": "jane.smith@hotmail.co.uk"}]
        assert acs_message["content"]["subject"] == "Website Enquiry: Volunteering - Jane Smith"

    def test_invalid_token_short_circuits_before_lookup(self, config, submission):
        self.altcha_service.verify.return_value = False

        assert self._handler(config).handle(submission) is False

        self.altcha_service.verify.assert_called_once_with(submission.altcha)
        self.recipient_repo.get_recipients.assert_not_called()
        self.email_client.begin_send.assert_not_called()

    def test_unknown_topic_is_not_sent(self, config, submission):
        self.recipient_repo.get_recipients.return_value = None

        assert self._handler(config).handle(submission) is False
        self.email_client.begin_send.assert_not_called()

    def test_topic_without_addresses_is_not_sent(self, config, submission):
        self.recipient_repo.get_recipients.return_value = RecipientRecord(topic="volunteering", emails=())

        assert self._handler(config).handle(submission) is False
        self.email_client.begin_send.assert_not_called()

    def test_invalid_submitter_email_still_sends(self, config, submission_data):
        submission_data["email"] = "jane at home"
        submission = Submission.model_validate(submission_data)

        assert self._handler(config).handle(submission) is True

        acs_message = self.email_client.begin_send.call_args.args[0]
        assert "replyTo" not in acs_message

    def test_dispatch_failure_is_reported_as_failure(self, config, submission):
        self.notifier_service = MagicMock(wraps=self.notifier_service)
        self.notifier_service.send_email.return_value = DispatchResult(accepted=False, reason="Invalid recipient")

        assert self._handler(config).handle(submission) is False
        self.notifier_service.send_email.assert_called_once()

    def test_message_build_failure(self, config, submission):
        self.notifier_service = MagicMock()
        self.notifier_service.build_message.return_value = None

        assert self._handler(config).handle(submission) is False
        self.notifier_service.send_email.assert_not_called()
