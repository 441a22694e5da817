"""Pydantic models for outbound email messages."""
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class OutboundMessage(BaseModel):
    """Represents an enquiry notification ready to hand to Azure Communication Services."""
    model_config = ConfigDict(frozen=True)

    subject: str
    html_body: str
    to_recipients: tuple[str, ...]
    reply_to: str | None = None
    bcc_recipient: str | None = None

    @field_validator("to_recipients")
    @classmethod
    def require_recipients(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        # dict.fromkeys keeps the first occurrence order
        recipients = tuple(dict.fromkeys(address for address in value if address))
        if not recipients:
            raise ValueError("at least one recipient is required")
        return recipients

    def to_acs_message(self, sender_address: str) -> dict[str, Any]:
        """
        Build the message payload accepted by EmailClient.begin_send.

        Args:
            sender_address (str): The verified sender address of the ACS domain.

        Returns:
            dict[str, Any]: The ACS email message.
        """
        recipients: dict[str, list[dict[str, str]]] = {
            "to": [{"address": address} for address in self.to_recipients]
        }
        if self.bcc_recipient:
            recipients["bcc"] = [{"address": self.bcc_recipient}]

        message: dict[str, Any] = {
            "senderAddress": sender_address,
            "recipients": recipients,
            "content": {
                "subject": self.subject,
                "html": self.html_body,
            },
        }
        if self.reply_to:
            message["replyTo"] = [{"address": self.reply_to}]

        return message


class DispatchResult(BaseModel):
    """Outcome of handing a message to the email service."""
    accepted: bool
    reason: str | None = None
