"""Slack Webhook Client - Imperative Shell.

This module handles HTTP communication with Slack webhooks.
All I/O is contained here; message formatting is in the core module.
"""

import logging
from dataclasses import dataclass
from typing import Any

import requests

from pokewatch.core.config import is_valid_webhook_url


logger = logging.getLogger(__name__)


# Default timeout for webhook requests (seconds)
DEFAULT_TIMEOUT = 10


@dataclass
class SlackResponse:
    """Response from Slack webhook.

    Attributes:
        success: Whether the message was sent successfully
        status_code: HTTP status code
        error: Error message if failed
    """
    success: bool
    status_code: int
    error: str | None = None


class SlackClient:
    """Client for sending messages to Slack via webhooks.

    This is part of the imperative shell - it handles HTTP I/O. Sends are
    best effort: failures are reported in the response, never raised and
    never retried.
    """

    def __init__(self, timeout: int = DEFAULT_TIMEOUT) -> None:
        """Initialize Slack client.

        Args:
            timeout: Request timeout in seconds
        """
        self.timeout = timeout

    def send_message(
        self,
        webhook_url: str,
        payload: dict[str, Any],
    ) -> SlackResponse:
        """Send a message to Slack via webhook.

        This method performs HTTP I/O.

        Args:
            webhook_url: Slack incoming webhook URL
            payload: Message payload (from formatter)

        Returns:
            SlackResponse indicating success or failure
        """
        try:
            response = requests.post(webhook_url, json=payload, timeout=self.timeout)
        except requests.Timeout:
            logger.error("Slack webhook timed out after %ss", self.timeout)
            return SlackResponse(success=False, status_code=0, error="Request timed out")
        except requests.RequestException as e:
            logger.error("Slack webhook request failed: %s", e)
            return SlackResponse(success=False, status_code=0, error=str(e))

        if response.status_code != 200:
            logger.warning("Slack webhook answered %d: %s", response.status_code, response.text)
            return SlackResponse(success=False, status_code=response.status_code, error=response.text)

        logger.debug("Slack webhook accepted the message")
        return SlackResponse(success=True, status_code=response.status_code)

    def send_text(self, webhook_url: str, text: str) -> SlackResponse:
        """Send a plain-text message as {"text": text}.

        The URL is checked before anything is sent; an invalid or missing
        URL drops the message.

        Args:
            webhook_url: Slack incoming webhook URL
            text: Message text

        Returns:
            SlackResponse indicating success or failure
        """
        if not is_valid_webhook_url(webhook_url):
            logger.error(
                "Cannot send Slack notification: invalid or missing webhook URL: %r",
                webhook_url,
            )
            return SlackResponse(
                success=False,
                status_code=0,
                error="Invalid or missing webhook URL",
            )

        return self.send_message(webhook_url, {"text": text})
