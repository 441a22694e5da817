"""Shared fixtures for the contact form tests."""
import pytest

from src.contact_form.config import ContactFormConfig
from src.contact_form.models.submission import Submission


@pytest.fixture
def config() -> ContactFormConfig:
    return ContactFormConfig(
        sender_address="DoNotReply@example.org",
        bcc_recipient="archive@example.org",
        altcha_url="https://altcha.example.org/api/v1/verify",
        altcha_api_key="key_123",
        tables_connection_string="UseDevelopmentStorage=true",
        acs_connection_string="endpoint=https://acs.example.org/;accesskey=abc",
    )


@pytest.fixture
def submission_data() -> dict:
    return {
        "firstName": "Jane",
        "lastName": "Smith",
        "email": "jane.smith@hotmail.co.uk",
        "topic": "volunteering",
        "subject": "Helping out",
        "message": "I would like to volunteer on Saturdays.",
        "altcha": "eyJhbGdvcml0aG0iOiJTSEEtMjU2In0=",
    }


@pytest.fixture
def submission(submission_data) -> Submission:
    return Submission.model_validate(submission_data)
