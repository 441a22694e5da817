"""Service for verifying ALTCHA bot-defense payloads."""
import logging

import requests
from requests.exceptions import RequestException


class AltchaService:
    """Verifies the ALTCHA payload submitted with a form against the verification API."""

    def __init__(self, url: str, api_key: str, timeout: float = 10.0, session: requests.Session | None = None):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def verify(self, payload: str) -> bool:
        """
        Verify an ALTCHA payload.

        Args:
            payload (str): The base64 payload produced by the ALTCHA widget.

        Returns:
            bool: True if the verification API reports the payload as verified, False otherwise.
        """
        if not payload:
            logging.warning("AltchaService.verify: Empty ALTCHA payload received.")
            return False

        try:
            response = self.session.post(
                self.url,
                params={"apiKey": self.api_key},
                json={"payload": payload},
                timeout=self.timeout,
            )
            response.raise_for_status()
            result = response.json()
        except RequestException as e:  # Catches timeouts, connection errors, HTTP errors
            logging.error(f"AltchaService.verify: Verification request failed: {e}")
            return False
        except ValueError as e:  # Catches response.json() errors
            logging.error(f"AltchaService.verify: Verification response was not valid JSON: {e}")
            return False

        if not isinstance(result, dict) or result.get("verified") is not True:
            logging.info("AltchaService.verify: ALTCHA payload was not verified.")
            return False

        return True
