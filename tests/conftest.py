from __future__ import annotations

import re
import threading
from typing import Callable, List, Optional, Tuple

import pytest

from email_triage.models import AgentDecision, Email


class FakeChatClient:
    """ChatClient double; ``reply`` receives (system_prompt, user_prompt)"""

    def __init__(self, reply: Callable[[str, str], str]):
        self.reply = reply
        self.calls: List[Tuple[str, str, float]] = []
        self._lock = threading.Lock()

    def complete(self, system_prompt: str, user_prompt: str, temperature: float) -> str:
        with self._lock:
            self.calls.append((system_prompt, user_prompt, temperature))
        return self.reply(system_prompt, user_prompt)


class StubEvaluator:
    def __init__(
        self,
        name: str,
        decision: Optional[AgentDecision] = None,
        error: Optional[Exception] = None,
        before: Optional[Callable[[], None]] = None,
    ):
        self.name = name
        self.decision = decision
        self.error = error
        self.before = before
        self.calls = 0

    def evaluate(self, email: Email) -> AgentDecision:
        self.calls += 1
        if self.before is not None:
            self.before()
        if self.error is not None:
            raise self.error
        return self.decision


def decision(should_handle=True, confidence=80, reasoning="stub reasoning", actions=None, escalate=False):
    return AgentDecision(
        should_handle=should_handle,
        confidence=confidence,
        reasoning=reasoning,
        suggested_actions=list(actions or []),
        escalate=escalate,
    )


def reply(should_handle, confidence, reasoning, actions=("Route to team",), escalate=False):
    return "\n".join(
        [
            f"SHOULD_HANDLE: {'true' if should_handle else 'false'}",
            f"CONFIDENCE: {confidence}",
            f"REASONING: {reasoning}",
            "SUGGESTED_ACTIONS: " + "\n".join(actions),
            f"ESCALATE: {'true' if escalate else 'false'}",
        ]
    )


def _email_section(user_prompt: str) -> str:
    match = re.search(r"FROM:(.*?)(?:\n\nConsider these factors:|\n\nAGENT ANALYSES:)", user_prompt, re.DOTALL)
    return (match.group(1) if match else user_prompt).lower()


def keyword_model(system_prompt: str, user_prompt: str) -> str:
    """Deterministic stand-in for the hosted model, keyed on role and keywords"""
    text = _email_section(user_prompt)

    if "Supervisor Agent" in system_prompt:
        analyses = user_prompt.split("AGENT ANALYSES:\n", 1)[1]
        first_agent = analyses.split(":", 1)[0].strip()
        return f"ASSIGNED_AGENT: {first_agent}\nPRIORITY: high\nREASONING: Best expertise match"

    if "Spam Filter Agent" in system_prompt:
        if any(word in text for word in ("noreply", "newsletter", "unsubscribe")):
            return reply(True, 95, "Automated newsletter", ("Archive",))
        return reply(False, 10, "Personal correspondence", ())

    if "Customer Support Agent" in system_prompt:
        if any(word in text for word in ("urgent", "critical", "outage")):
            return reply(True, 95, "Service outage reported", ("Page on-call engineer",), escalate=True)
        if any(word in text for word in ("error", "issue", "problem", "support", "help")):
            return reply(True, 92, "Customer needs technical help", ("Open support ticket",))
        return reply(False, 10, "Not a support request", ())

    if "Sales Agent" in system_prompt:
        if any(word in text for word in ("fortune", "enterprise")):
            return reply(True, 95, "High-value enterprise lead", ("Send pricing", "Book demo"), escalate=True)
        if any(word in text for word in ("pricing", "demo", "purchase", "buy", "quote", "inquiry")):
            return reply(True, 85, "Sales inquiry", ("Send pricing",))
        return reply(False, 5, "No buying intent", ())

    if "HR Agent" in system_prompt:
        if any(word in text for word in ("recruit", "candidate", "resume", "job", "hire")):
            return reply(True, 80, "Recruitment outreach", ("Forward to talent team",))
        if "hr department" in text:
            return reply(True, 75, "Internal HR announcement", ("Share with staff",))
        if "employee" in text:
            return reply(True, 60, "Mentions employees", ("Review with HR",))
        return reply(False, 5, "Not HR related", ())

    raise AssertionError(f"unexpected system prompt: {system_prompt}")


@pytest.fixture
def email():
    return Email(
        id="email-test",
        from_address="alice@example.com",
        to_address="team@company.com",
        subject="Question about my account",
        body="Could someone take a look at my account settings?",
    )


@pytest.fixture
def keyword_client():
    return FakeChatClient(keyword_model)
