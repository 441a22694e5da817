"""Tests for ALTCHA verification."""
from unittest.mock import MagicMock

import requests

from src.contact_form.services.altcha_service import AltchaService


class TestAltchaService:

    def setup_method(self):
        self.session = MagicMock(spec=requests.Session)
        self.response = MagicMock()
        self.session.post.return_value = self.response
        self.service = AltchaService(
            "https://altcha.example.org/api/v1/verify", "key_123", timeout=5, session=self.session
        )

    def test_verified_payload(self):
        self.response.json.return_value = {"verified": True}

        assert self.service.verify("payload") is True
        self.session.post.assert_called_once_with(
            "https://altcha.example.org/api/v1/verify",
            params={"apiKey": "key_123"},
            json={"payload": "payload"},
            timeout=5,
        )

    def test_unverified_payload(self):
        self.response.json.return_value = {"verified": False}

        assert self.service.verify("payload") is False

    def test_missing_verified_flag(self):
        self.response.json.return_value = {"error": "expired"}

        assert self.service.verify("payload") is False

    def test_empty_payload_is_not_sent(self):
        assert self.service.verify("") is False
        self.session.post.assert_not_called()

    def test_http_error(self):
        self.response.raise_for_status.side_effect = requests.HTTPError("401 Unauthorized")

        assert self.service.verify("payload") is False

    def test_timeout(self):
        self.session.post.side_effect = requests.Timeout("timed out")

        assert self.service.verify("payload") is False

    def test_invalid_json(self):
        self.response.json.side_effect = ValueError("Expecting value")

        assert self.service.verify("payload") is False

    def test_non_object_json(self):
        self.response.json.return_value = ["verified"]

        assert self.service.verify("payload") is False
