"""Discord notifier.

Posts the rendered report to a Discord channel, one message per request and
in order.  A webhook URL is used when configured; otherwise the bot token
and channel id are used against the REST API.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import requests

from .config import (BOT_TOKEN, DISCORD_API_BASE, DISCORD_CHANNEL_ID,
                     DISCORD_WEBHOOK_URL, REQUEST_TIMEOUT_SECONDS)
from .utils import HTTPError, get_http_session, raise_for_status, warn

logger = logging.getLogger(__name__)


class DeliveryFailure(Exception):
    """Raised when a message could not be posted to Discord."""


class MissingBotToken(DeliveryFailure):
    """No bot token was given via --token or the BOT_TOKEN environment variable."""


class MissingChannelID(DeliveryFailure):
    """No channel id was given via --channel-id or DISCORD_CHANNEL_ID."""


def _post(session: requests.Session, url: str, **kwargs) -> requests.Response:
    # Not retried: every successful POST is a new message.
    try:
        resp = session.post(url, timeout=REQUEST_TIMEOUT_SECONDS, **kwargs)
        raise_for_status(resp)
    except (requests.RequestException, HTTPError) as e:
        raise DeliveryFailure(f"failed to post message: {e}") from e
    return resp


def _message_id(resp: requests.Response) -> str:
    try:
        return str(resp.json().get("id", "?"))
    except ValueError:
        # Webhooks answer 204 with no body unless ?wait=true.
        return "?"


def send_messages(
    messages: Sequence[str],
    *,
    token: Optional[str] = None,
    channel_id: Optional[int] = None,
    webhook_url: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> None:
    """Post each message in order. Raises DeliveryFailure on the first error."""
    if not messages:
        logger.warning(warn("no messages to send to Discord"))
        return

    if webhook_url is None:
        webhook_url = DISCORD_WEBHOOK_URL

    headers = {}
    if webhook_url:
        url = webhook_url
    else:
        token = token or BOT_TOKEN
        if not token:
            raise MissingBotToken("no Discord bot token provided")
        channel_id = channel_id or DISCORD_CHANNEL_ID
        if not channel_id:
            raise MissingChannelID("no Discord channel ID provided")
        url = f"{DISCORD_API_BASE.rstrip('/')}/channels/{channel_id}/messages"
        headers["Authorization"] = f"Bot {token}"

    close_session = False
    if session is None:
        session = get_http_session()
        close_session = True

    try:
        for i, message in enumerate(messages, start=1):
            logger.debug("Posting message %d/%d (%d chars)", i, len(messages), len(message))
            resp = _post(session, url, json={"content": message}, headers=headers)
            logger.info("SENT: %s", _message_id(resp))
    finally:
        if close_session:
            session.close()


__all__ = ["DeliveryFailure", "MissingBotToken", "MissingChannelID", "send_messages"]
