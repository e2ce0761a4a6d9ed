"""Tests for OpenAI request -> LongCat payload translation."""

import random

import pytest

from longcat_proxy.core.translator import (
    DEFAULT_MODEL,
    FeatureFlags,
    derive_feature_flags,
    extract_last_message_content,
    generate_message_ids,
    translate_request,
)
from longcat_proxy.testing import build_chat_request


class TestDeriveFeatureFlags:
    """Tests for model name -> feature flag mapping."""

    @pytest.mark.parametrize(
        "model, expected",
        [
            ("longcat-thinking", FeatureFlags(reasoning=True, search=False)),
            ("longcat-search", FeatureFlags(reasoning=False, search=True)),
            ("longcat-flash", FeatureFlags(reasoning=False, search=False)),
            ("LongCat-Reasoner-Online", FeatureFlags(reasoning=True, search=True)),
            ("", FeatureFlags()),
        ],
    )
    def test_flags_from_model_name(self, model, expected):
        assert derive_feature_flags(model) == expected


class TestExtractLastMessageContent:
    """Tests for picking the forwarded content."""

    def test_uses_only_last_message(self):
        messages = [
            {"role": "system", "content": "be nice"},
            {"role": "user", "content": "first"},
            {"role": "user", "content": "second"},
        ]
        assert extract_last_message_content(messages) == "second"

    @pytest.mark.parametrize(
        "messages",
        [None, [], [{"role": "user"}], [{"role": "user", "content": None}], ["text"], "abc"],
    )
    def test_missing_content_becomes_empty_string(self, messages):
        assert extract_last_message_content(messages) == ""

    def test_joins_text_content_parts(self):
        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "look"},
                    {"type": "image_url", "image_url": {"url": "https://x"}},
                    {"type": "text", "text": "here"},
                ],
            }
        ]
        assert extract_last_message_content(messages) == "look\nhere"


class TestTranslateRequest:
    """Tests for the upstream payload shape."""

    def test_payload_shape(self):
        payload = translate_request(build_chat_request("Hi there", model="longcat-thinking"))
        assert payload["content"] == "Hi there"
        assert payload["agentId"] == "1"
        assert payload["reasonEnabled"] == 1
        assert payload["searchEnabled"] == 0
        assert payload["regenerate"] == 0

        user, assistant = payload["messages"]
        assert user["role"] == "user"
        assert user["events"] == [{"type": "userMsg", "content": "Hi there", "status": "FINISHED"}]
        assert user["chatStatus"] == "FINISHED"
        assert user["idType"] == "custom"

        assert assistant["role"] == "assistant"
        assert assistant["content"] == ""
        assert assistant["chatStatus"] == "LOADING"
        assert assistant["idType"] == "custom"

    def test_message_ids_are_distinct_eight_digit_integers(self):
        payload = translate_request(build_chat_request())
        ids = [message["messageId"] for message in payload["messages"]]
        assert ids[0] != ids[1]
        assert all(10_000_000 <= value <= 99_999_999 for value in ids)

    def test_message_ids_use_given_rng(self):
        assert generate_message_ids(random.Random(7)) == generate_message_ids(random.Random(7))

    def test_missing_model_uses_default_flags(self):
        payload = translate_request({"messages": [{"role": "user", "content": "x"}]})
        assert DEFAULT_MODEL == "longcat-flash"
        assert payload["reasonEnabled"] == 0
        assert payload["searchEnabled"] == 0

    def test_never_fails_on_missing_messages(self):
        payload = translate_request({"model": "longcat-search"})
        assert payload["content"] == ""
        assert payload["searchEnabled"] == 1
