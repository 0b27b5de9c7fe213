"""Tests for webhook signature verification."""

import hashlib
import hmac
import json

import pytest

from magpie_sdk import WebhookError, WebhookEvent, WebhookEventType, WebhookVerifier
from magpie_sdk.webhooks import parse_signature_header, timing_safe_equal
from tests.conftest import FROZEN_NOW, WEBHOOK_SECRET, RecordingHandler

PAYLOAD = json.dumps(
    {
        "id": "evt_123",
        "type": "charge.succeeded",
        "data": {"id": "ch_123", "amount": 10000},
        "created": FROZEN_NOW,
        "livemode": False,
    }
)


def sign(payload, secret=WEBHOOK_SECRET, timestamp=None):
    message = f"{timestamp}.{payload}" if timestamp is not None else payload
    return hmac.new(secret.encode(), message.encode(), hashlib.sha256).hexdigest()


def flip_hex(signature):
    last = signature[-1]
    return signature[:-1] + ("0" if last != "0" else "1")


class TestHelpers:
    """Tests for header parsing and comparison."""

    def test_parse_timestamped_header(self):
        assert parse_signature_header("t=123,v1=abc,v1=def") == ("123", ["abc", "def"])

    def test_parse_bare_header(self):
        assert parse_signature_header("v1=abc") == (None, ["abc"])

    def test_parse_without_prefix(self):
        assert parse_signature_header("abc") == (None, [])

    def test_timing_safe_equal(self):
        assert timing_safe_equal("abc", "abc")
        assert not timing_safe_equal("abc", "abd")
        assert not timing_safe_equal("abc", "abcd")


class TestVerifySignature:
    """Tests for verify_signature."""

    def test_bare_signature(self, verifier):
        assert verifier.verify_signature(PAYLOAD, f"v1={sign(PAYLOAD)}", WEBHOOK_SECRET)

    def test_timestamped_signature(self, verifier):
        header = f"t={FROZEN_NOW},v1={sign(PAYLOAD, timestamp=FROZEN_NOW)}"
        assert verifier.verify_signature(PAYLOAD, header, WEBHOOK_SECRET)

    def test_bytes_payload(self, verifier):
        assert verifier.verify_signature(PAYLOAD.encode(), f"v1={sign(PAYLOAD)}", WEBHOOK_SECRET)

    def test_single_character_change_fails(self, verifier):
        header = f"v1={flip_hex(sign(PAYLOAD))}"
        assert verifier.verify_signature(PAYLOAD, header, WEBHOOK_SECRET) is False

    def test_modified_payload_fails(self, verifier):
        header = f"v1={sign(PAYLOAD)}"
        assert verifier.verify_signature(PAYLOAD + " ", header, WEBHOOK_SECRET) is False

    def test_wrong_secret_fails(self, verifier):
        header = f"v1={sign(PAYLOAD, secret='whsec_other')}"
        assert verifier.verify_signature(PAYLOAD, header, WEBHOOK_SECRET) is False

    def test_any_of_multiple_signatures(self, verifier):
        old = sign(PAYLOAD, secret="whsec_old", timestamp=FROZEN_NOW)
        current = sign(PAYLOAD, timestamp=FROZEN_NOW)
        header = f"t={FROZEN_NOW},v1={old},v1={current}"
        assert verifier.verify_signature(PAYLOAD, header, WEBHOOK_SECRET)

    def test_bare_digest_behind_timestamp_fails(self, verifier):
        header = f"t={FROZEN_NOW},v1={sign(PAYLOAD)}"
        assert verifier.verify_signature(PAYLOAD, header, WEBHOOK_SECRET) is False

    def test_signature_moved_to_new_timestamp_fails(self, verifier):
        captured = sign(PAYLOAD, timestamp=FROZEN_NOW - 3600)
        header = f"t={FROZEN_NOW},v1={captured}"
        assert verifier.verify_signature(PAYLOAD, header, WEBHOOK_SECRET) is False

    def test_missing_prefix_fails(self, verifier):
        assert verifier.verify_signature(PAYLOAD, sign(PAYLOAD), WEBHOOK_SECRET) is False

    def test_truncated_signature_fails(self, verifier):
        assert verifier.verify_signature(PAYLOAD, f"v1={sign(PAYLOAD)[:10]}", WEBHOOK_SECRET) is False

    def test_custom_algorithm_and_prefix(self, verifier):
        digest = hmac.new(WEBHOOK_SECRET.encode(), PAYLOAD.encode(), hashlib.sha512).hexdigest()
        config = {"algorithm": "sha512", "prefix": "v2="}
        assert verifier.verify_signature(PAYLOAD, f"v2={digest}", WEBHOOK_SECRET, config)

    def test_unknown_algorithm_returns_false(self, verifier):
        config = {"algorithm": "not_a_hash"}
        assert verifier.verify_signature(PAYLOAD, f"v1={sign(PAYLOAD)}", WEBHOOK_SECRET, config) is False

    def test_non_string_header_returns_false(self, verifier):
        assert verifier.verify_signature(PAYLOAD, None, WEBHOOK_SECRET) is False


class TestTimestamps:
    """Tests for the replay window."""

    @pytest.mark.parametrize(
        "offset,expected",
        [(0, True), (-299, True), (-300, True), (-301, False), (299, True), (300, True), (301, False)],
    )
    def test_tolerance_boundaries(self, verifier, offset, expected):
        assert verifier.is_valid_timestamp(FROZEN_NOW + offset, 300) is expected

    def test_custom_tolerance(self, verifier):
        assert verifier.is_valid_timestamp(FROZEN_NOW - 30, 60)
        assert not verifier.is_valid_timestamp(FROZEN_NOW - 61, 60)


class TestVerifyWithHeaders:
    """Tests for verify_signature_with_timestamp."""

    def test_valid_headers(self, verifier):
        headers = {
            "X-Magpie-Signature": f"v1={sign(PAYLOAD)}",
            "X-Magpie-Timestamp": str(FROZEN_NOW - 10),
        }
        assert verifier.verify_signature_with_timestamp(PAYLOAD, headers, WEBHOOK_SECRET)

    def test_list_header_values(self, verifier):
        headers = {
            "x-magpie-signature": [f"v1={sign(PAYLOAD)}", "v1=ignored"],
            "x-magpie-timestamp": [str(FROZEN_NOW)],
        }
        assert verifier.verify_signature_with_timestamp(PAYLOAD, headers, WEBHOOK_SECRET)

    def test_missing_signature_header(self, verifier):
        with pytest.raises(WebhookError, match="Missing signature header: x-magpie-signature") as exc_info:
            verifier.verify_signature_with_timestamp(PAYLOAD, {}, WEBHOOK_SECRET)
        assert exc_info.value.code == "webhook_signature_missing"
        assert exc_info.value.type == "webhook_error"

    def test_stale_timestamp_header(self, verifier):
        headers = {
            "x-magpie-signature": f"v1={sign(PAYLOAD)}",
            "x-magpie-timestamp": str(FROZEN_NOW - 3600),
        }
        with pytest.raises(WebhookError, match="outside tolerance window") as exc_info:
            verifier.verify_signature_with_timestamp(PAYLOAD, headers, WEBHOOK_SECRET)
        assert exc_info.value.code == "webhook_timestamp_invalid"

    def test_unparseable_timestamp_header(self, verifier):
        headers = {"x-magpie-signature": f"v1={sign(PAYLOAD)}", "x-magpie-timestamp": "soon"}
        with pytest.raises(WebhookError):
            verifier.verify_signature_with_timestamp(PAYLOAD, headers, WEBHOOK_SECRET)

    def test_no_timestamp_header_skips_window(self, verifier):
        headers = {"x-magpie-signature": f"v1={sign(PAYLOAD)}"}
        assert verifier.verify_signature_with_timestamp(PAYLOAD, headers, WEBHOOK_SECRET)

    def test_bad_signature_returns_false(self, verifier):
        headers = {"x-magpie-signature": f"v1={flip_hex(sign(PAYLOAD))}"}
        assert verifier.verify_signature_with_timestamp(PAYLOAD, headers, WEBHOOK_SECRET) is False

    def test_custom_header_names(self, verifier):
        headers = {"X-Signature": f"v1={sign(PAYLOAD)}", "X-Sent-At": str(FROZEN_NOW)}
        config = {"signatureHeader": "x-signature", "timestampHeader": "x-sent-at"}
        assert verifier.verify_signature_with_timestamp(PAYLOAD, headers, WEBHOOK_SECRET, config)


class TestConstructEvent:
    """Tests for construct_event."""

    def test_round_trip_with_test_signature(self, verifier):
        header = verifier.generate_test_signature(PAYLOAD, WEBHOOK_SECRET)

        event = verifier.construct_event(PAYLOAD, header, WEBHOOK_SECRET)

        assert isinstance(event, WebhookEvent)
        assert event.id == "evt_123"
        assert event.type == WebhookEventType.CHARGE_SUCCEEDED
        assert event.data["amount"] == 10000
        assert event.created == FROZEN_NOW

    def test_generate_test_signature_format(self, verifier):
        header = verifier.generate_test_signature(PAYLOAD, WEBHOOK_SECRET)
        assert header == f"t={FROZEN_NOW},v1={sign(PAYLOAD, timestamp=FROZEN_NOW)}"

    def test_flipped_signature_rejected(self, verifier):
        header = f"t={FROZEN_NOW},v1={flip_hex(sign(PAYLOAD, timestamp=FROZEN_NOW))}"
        with pytest.raises(WebhookError, match="Invalid webhook signature"):
            verifier.construct_event(PAYLOAD, header, WEBHOOK_SECRET)

    def test_replayed_event_rejected(self, verifier):
        old = FROZEN_NOW - 3600
        header = f"t={old},v1={sign(PAYLOAD, timestamp=old)}"
        with pytest.raises(WebhookError, match="outside tolerance window"):
            verifier.construct_event(PAYLOAD, header, WEBHOOK_SECRET)

    def test_signature_generated_an_hour_ago_rejected(self):
        header = WebhookVerifier(clock=lambda: FROZEN_NOW - 3600).generate_test_signature(
            PAYLOAD, WEBHOOK_SECRET
        )
        verifier = WebhookVerifier(clock=lambda: FROZEN_NOW)
        with pytest.raises(WebhookError):
            verifier.construct_event(PAYLOAD, header, WEBHOOK_SECRET)

    def test_bare_signature_accepted(self, verifier):
        event = verifier.construct_event(PAYLOAD, f"v1={sign(PAYLOAD)}", WEBHOOK_SECRET)
        assert event.id == "evt_123"

    def test_invalid_json(self, verifier):
        payload = "not json"
        with pytest.raises(WebhookError, match="Invalid JSON in webhook payload"):
            verifier.construct_event(payload, f"v1={sign(payload)}", WEBHOOK_SECRET)

    def test_non_object_json(self, verifier):
        payload = "[1, 2]"
        with pytest.raises(WebhookError, match="Invalid JSON in webhook payload"):
            verifier.construct_event(payload, f"v1={sign(payload)}", WEBHOOK_SECRET)

    @pytest.mark.parametrize(
        "event",
        [
            {"id": "evt_1", "type": "charge.succeeded", "data": {}},
            {"type": "charge.succeeded", "created": FROZEN_NOW},
            {"id": "evt_1", "type": "charge.succeeded", "created": "yesterday"},
        ],
    )
    def test_incomplete_event_rejected(self, verifier, event):
        payload = json.dumps(event)
        header = verifier.generate_test_signature(payload, WEBHOOK_SECRET)

        with pytest.raises(WebhookError, match="Invalid webhook event payload") as exc_info:
            verifier.construct_event(payload, header, WEBHOOK_SECRET)

        assert exc_info.value.code == "invalid_event"
        assert exc_info.value.type == "webhook_error"

    def test_unknown_event_type_kept(self, verifier):
        payload = json.dumps({"id": "evt_9", "type": "charge.disputed", "created": FROZEN_NOW})
        event = verifier.construct_event(payload, f"v1={sign(payload)}", WEBHOOK_SECRET)
        assert event.type == "charge.disputed"


def test_webhooks_resource_delegates(make_magpie):
    magpie = make_magpie(RecordingHandler())
    magpie.webhooks.verifier = WebhookVerifier(clock=lambda: FROZEN_NOW)

    header = magpie.webhooks.generate_test_signature(PAYLOAD, WEBHOOK_SECRET)

    assert magpie.webhooks.verify_signature(PAYLOAD, header, WEBHOOK_SECRET)
    assert magpie.webhooks.construct_event(PAYLOAD, header, WEBHOOK_SECRET).id == "evt_123"
    assert magpie.webhooks.is_valid_timestamp(FROZEN_NOW)
