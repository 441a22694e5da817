"""Repository for looking up topic recipients in Azure Table Storage."""
import logging

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.data.tables import TableClient

from ..models.recipient import RecipientRecord


class RecipientRepository:
    """Repository for topic recipients."""

    def __init__(self, table_client: TableClient):
        self.table_client = table_client

    @classmethod
    def from_connection_string(cls, conn_str: str, table_name: str) -> "RecipientRepository":
        """
        Create a repository for the given table.

        Args:
            conn_str (str): The Table Storage (or Cosmos DB Table API) connection string.
            table_name (str): The name of the recipients table.

        Returns:
            RecipientRepository: The repository.
        """
        try:
            table_client = TableClient.from_connection_string(conn_str=conn_str, table_name=table_name)
        except ValueError as e:
            logging.error(f"Invalid table storage connection string format: {e}")
            raise
        return cls(table_client)

    def get_recipients(self, topic: str) -> RecipientRecord | None:
        """
        Get the recipients for a topic.

        The topic must match the PartitionKey exactly (case-sensitive).

        Args:
            topic (str): The topic key from the submission.

        Returns:
            RecipientRecord | None: The first matching record, or None if there is none
            or the lookup failed.
        """
        try:
            entities = self.table_client.query_entities(
                query_filter="PartitionKey eq @topic",
                parameters={"topic": topic},
            )
            entity = next(iter(entities), None)
        except ResourceNotFoundError as e:
            logging.error(f"RecipientRepository.get_recipients: Recipients table not found: {e}")
            return None
        except AzureError as e:
            logging.error(f"RecipientRepository.get_recipients: Error querying recipients for '{topic}': {e}")
            return None

        if entity is None:
            logging.info(f"RecipientRepository.get_recipients: No recipients configured for topic '{topic}'")
            return None

        return RecipientRecord.from_entity(entity)
