"""Tests for the EmailMessage builder."""

import json

import pytest

from acs_mailer.errors import InputError
from acs_mailer.message import EmailAddress, EmailAttachment, EmailMessage


def _full_message() -> EmailMessage:
    return (
        EmailMessage(sender_address="a@x.com")
        .add_to("to1@x.com", "To One")
        .add_to("to2@x.com")
        .add_cc("cc@x.com")
        .add_bcc("bcc@x.com")
        .add_reply_to("reply@x.com", "Reply")
        .add_attachment(EmailAttachment("a.txt", "text/plain", "aGk="))
        .add_attachment(EmailAttachment("b.pdf", "application/pdf", "JVBERg=="))
        .add_header("X-Campaign", "october")
        .set_subject("Hello")
        .set_body("hello")
    )


class TestPayload:
    """Tests for the emails:send body shape."""

    def test_plain_text_payload(self):
        message = EmailMessage(sender_address="a@x.com").add_to("b@x.com").set_subject("Hi").set_body("hello")
        payload = message.to_payload()

        assert payload == {
            "senderAddress": "a@x.com",
            "content": {"subject": "Hi", "plainText": "hello"},
            "recipients": {
                "to": [{"address": "b@x.com", "displayName": ""}],
                "cc": [],
                "bcc": [],
            },
            "headers": None,
            "replyTo": [],
            "attachments": [],
            "userEngagementTrackingDisabled": "false",
        }

    def test_html_payload(self):
        message = EmailMessage(sender_address="a@x.com").set_body("<p>hi</p>", is_html=True)
        content = message.to_payload()["content"]
        assert content == {"subject": "", "html": "<p>hi</p>"}

    def test_key_order(self):
        """Top-level keys keep the wire order."""
        keys = list(_full_message().to_payload())
        assert keys == [
            "senderAddress",
            "content",
            "recipients",
            "headers",
            "replyTo",
            "attachments",
            "userEngagementTrackingDisabled",
        ]

    def test_headers_and_attachments(self):
        payload = _full_message().to_payload()
        assert payload["headers"] == {"X-Campaign": "october"}
        assert payload["attachments"][1] == {
            "name": "b.pdf",
            "contentType": "application/pdf",
            "contentInBase64": "JVBERg==",
        }
        assert payload["replyTo"] == [{"address": "reply@x.com", "displayName": "Reply"}]

    def test_header_replaced_by_name(self):
        message = EmailMessage().add_header("X-A", "1").add_header("X-B", "2").add_header("X-A", "3")
        assert message.headers == {"X-A": "3", "X-B": "2"}
        assert list(message.headers) == ["X-A", "X-B"]

    def test_tracking_disabled(self):
        message = EmailMessage(user_engagement_tracking_disabled=True)
        assert message.to_payload()["userEngagementTrackingDisabled"] == "true"


class TestSerialize:
    """Tests for byte-level serialization."""

    def test_deterministic(self):
        message = _full_message()
        assert message.serialize() == message.serialize()
        assert _full_message().serialize() == message.serialize()

    def test_compact_utf8_json(self):
        message = EmailMessage(sender_address="a@x.com").set_subject("Café")
        body = message.serialize()
        assert b": " not in body
        assert "Café".encode("utf-8") in body
        assert json.loads(body)["content"]["subject"] == "Café"

    def test_changes_with_content(self):
        message = _full_message()
        before = message.serialize()
        message.set_subject("Other")
        assert message.serialize() != before


class TestValidate:
    """Tests for required fields."""

    def test_missing_sender(self):
        with pytest.raises(InputError):
            EmailMessage().add_to("b@x.com").validate()

    def test_missing_recipients(self):
        with pytest.raises(InputError):
            EmailMessage(sender_address="a@x.com").add_reply_to("r@x.com").validate()

    def test_bcc_only_is_valid(self):
        EmailMessage(sender_address="a@x.com").add_bcc("b@x.com").validate()


class TestClearing:
    """Tests for clear and reset operations."""

    def test_clear_each_list_empties_message(self):
        message = _full_message()
        assert not message.is_empty

        message.clear_to().clear_cc().clear_bcc().clear_reply_to()
        message.clear_attachments().clear_headers()

        assert message.is_empty
        assert message.to_payload()["headers"] is None

    def test_clear_all_recipients_keeps_reply_to(self):
        message = _full_message().clear_all_recipients()
        assert message.to == [] and message.cc == [] and message.bcc == []
        assert message.reply_to == [EmailAddress("reply@x.com", "Reply")]

    def test_reset_restores_defaults(self):
        message = _full_message().set_body("<b>x</b>", is_html=True)
        message.user_engagement_tracking_disabled = True

        message.reset()

        assert message == EmailMessage()
