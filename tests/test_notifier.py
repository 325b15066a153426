import pytest
import requests

from newcity_monitor import notifier
from newcity_monitor.notifier import (DeliveryFailure, MissingBotToken,
                                      MissingChannelID, send_messages)

from .conftest import FakeResponse, FakeSession


@pytest.fixture(autouse=True)
def no_env_credentials(monkeypatch):
    monkeypatch.setattr(notifier, "DISCORD_WEBHOOK_URL", None)
    monkeypatch.setattr(notifier, "BOT_TOKEN", None)
    monkeypatch.setattr(notifier, "DISCORD_CHANNEL_ID", 0)


def test_no_messages_sends_nothing():
    session = FakeSession()
    send_messages([], session=session)
    assert session.calls == []


def test_bot_posts_each_message_in_order():
    session = FakeSession([
        FakeResponse(200, payload={"id": "11"}),
        FakeResponse(200, payload={"id": "12"}),
    ])
    send_messages(["first", "second"], token="tok", channel_id=42, session=session)

    assert [c[2]["json"] for c in session.calls] == [{"content": "first"}, {"content": "second"}]
    method, url, kwargs = session.calls[0]
    assert method == "POST"
    assert url == "https://discord.com/api/v10/channels/42/messages"
    assert kwargs["headers"] == {"Authorization": "Bot tok"}


def test_webhook_takes_precedence():
    session = FakeSession([FakeResponse(204)])
    send_messages(["hi"], token="tok", channel_id=42,
                  webhook_url="https://discord.test/api/webhooks/1/x", session=session)
    method, url, kwargs = session.calls[0]
    assert url == "https://discord.test/api/webhooks/1/x"
    assert kwargs["headers"] == {}


def test_token_from_config(monkeypatch):
    monkeypatch.setattr(notifier, "BOT_TOKEN", "env-token")
    session = FakeSession()
    send_messages(["hi"], channel_id=7, session=session)
    assert session.calls[0][2]["headers"] == {"Authorization": "Bot env-token"}


def test_missing_token():
    with pytest.raises(MissingBotToken):
        send_messages(["hi"], channel_id=42, session=FakeSession())


def test_missing_channel():
    with pytest.raises(MissingChannelID):
        send_messages(["hi"], token="tok", session=FakeSession())


def test_credential_errors_are_delivery_failures():
    assert issubclass(MissingBotToken, DeliveryFailure)
    assert issubclass(MissingChannelID, DeliveryFailure)


def test_stops_at_first_failed_message():
    session = FakeSession([
        FakeResponse(200, payload={"id": "1"}),
        FakeResponse(403),
        FakeResponse(200, payload={"id": "3"}),
    ])
    with pytest.raises(DeliveryFailure):
        send_messages(["a", "b", "c"], token="tok", channel_id=1, session=session)
    assert len(session.calls) == 2


def test_connection_error_is_delivery_failure():
    session = FakeSession([requests.ConnectionError("down")])
    with pytest.raises(DeliveryFailure):
        send_messages(["a"], token="tok", channel_id=1, session=session)
