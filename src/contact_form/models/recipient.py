"""Model for topic recipients held in Azure Table Storage."""
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict

EMAILS_DELIMITER = ","


class RecipientRecord(BaseModel):
    """
    Recipients for a single contact form topic.

    In the table the topic is the PartitionKey and the addresses are stored
    as a comma-delimited string in the RowKey. An Emails column, when present,
    takes precedence over the RowKey.
    """
    model_config = ConfigDict(frozen=True)

    topic: str
    emails: tuple[str, ...] = ()

    @classmethod
    def from_entity(cls, entity: Mapping[str, Any]) -> "RecipientRecord":
        """
        Build a record from a table entity.

        Args:
            entity (Mapping[str, Any]): The table entity.

        Returns:
            RecipientRecord: The record, with blank addresses dropped.
        """
        raw_emails: str = entity.get("Emails") or entity.get("RowKey") or ""
        emails = tuple(
            address.strip() for address in raw_emails.split(EMAILS_DELIMITER) if address.strip()
        )
        return cls(topic=entity["PartitionKey"], emails=emails)
