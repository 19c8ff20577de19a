"""Shared fixtures: fake LLM clients and sample data."""

from types import SimpleNamespace

import pytest

from lead_scoring.models.schemas import Lead, Offer
from lead_scoring.stages.intent_classifier import IntentClassifierStage


class FakeCompletions:
    """Stands in for `client.chat.completions`."""

    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        content = self.replies.pop(0) if self.replies else ""
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
        )


class FakeChatClient:
    """Minimal OpenAI-style client recording every request."""

    def __init__(self, replies=None, error=None):
        self.completions = FakeCompletions(replies=replies, error=error)
        self.chat = SimpleNamespace(completions=self.completions)

    @property
    def calls(self):
        return self.completions.calls


class FakeMessagesClient:
    """Minimal Anthropic-style client: `client.messages.create`."""

    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.calls = []
        self.messages = SimpleNamespace(create=self._create)

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        text = self.replies.pop(0) if self.replies else ""
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=text)])


def make_classifier(replies=None, error=None, api_key="test-key"):
    client = FakeChatClient(replies=replies, error=error)
    stage = IntentClassifierStage(api_key=api_key, provider="openai", model="test-model", client=client)
    return stage, client


def make_anthropic_classifier(replies=None, error=None):
    client = FakeMessagesClient(replies=replies, error=error)
    stage = IntentClassifierStage(
        api_key="test-key", provider="anthropic", model="test-model", client=client
    )
    return stage, client


@pytest.fixture
def offer():
    return Offer(
        name="AI Outreach Automation",
        value_props=["24/7 outreach", "6x more meetings"],
        ideal_use_cases=["B2B SaaS mid-market"],
    )


@pytest.fixture
def complete_lead():
    return Lead(
        name="Ava Patel",
        role="Head of Growth",
        company="FlowMetrics",
        industry="B2B SaaS mid-market",
        location="Austin",
        linkedin_bio="Scaling outbound at a Series B startup",
    )
