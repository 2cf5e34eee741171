"""
Lenient readers for the labelled-line replies the agents ask the model for.

Replies look like::

    SHOULD_HANDLE: true
    CONFIDENCE: 85
    REASONING: Customer reports an outage
    SUGGESTED_ACTIONS: Page on-call engineer
    Reply with status page link
    ESCALATE: true

Missing or malformed fields fall back to defaults. The returned records keep
the names of the fields that fell back, so callers can tell a compliant reply
from a partial one.
"""

from __future__ import annotations

import re

from .models import AgentDecision, ConflictResolution, ParsedReply


DEFAULT_CONFIDENCE = 50
DEFAULT_REASONING = "Analysis completed"
DEFAULT_CONFLICT_REASONING = "Conflict resolved by supervisor"

LABELS = ("SHOULD_HANDLE", "CONFIDENCE", "REASONING", "SUGGESTED_ACTIONS", "ESCALATE")

SHOULD_HANDLE_RE = re.compile(r"SHOULD_HANDLE: (true|false)")
CONFIDENCE_RE = re.compile(r"CONFIDENCE: (\d+)")
REASONING_RE = re.compile(r"REASONING: (.+?)(?=\n|$)")
ESCALATE_RE = re.compile(r"ESCALATE: (true|false)")
ACTIONS_RE = re.compile(
    r"SUGGESTED_ACTIONS:[ \t]*(.*?)(?=\n(?:%s):|$)" % "|".join(LABELS),
    re.DOTALL,
)

ASSIGNED_AGENT_RE = re.compile(r"ASSIGNED_AGENT: (\w+)")
PRIORITY_RE = re.compile(r"PRIORITY: (low|medium|high|urgent)")


class ReplyParseError(ValueError):
    """Raised when a reply carries no text to parse at all"""


def _require_text(content) -> str:
    if not isinstance(content, str) or not content.strip():
        raise ReplyParseError(f"Empty or non-text reply: {content!r}")
    return content


def parse_agent_reply(content: str) -> ParsedReply:
    """Read an AgentDecision out of a free-text model reply"""
    content = _require_text(content)
    defaulted = set()

    should_handle = "SHOULD_HANDLE: true" in content
    if not SHOULD_HANDLE_RE.search(content):
        defaulted.add("should_handle")

    confidence_match = CONFIDENCE_RE.search(content)
    if confidence_match:
        confidence = int(confidence_match.group(1))
    else:
        confidence = DEFAULT_CONFIDENCE
        defaulted.add("confidence")

    reasoning_match = REASONING_RE.search(content)
    if reasoning_match:
        reasoning = reasoning_match.group(1).strip()
    else:
        reasoning = DEFAULT_REASONING
        defaulted.add("reasoning")

    escalate_match = ESCALATE_RE.search(content)
    if escalate_match:
        escalate = escalate_match.group(1) == "true"
    else:
        escalate = False
        defaulted.add("escalate")

    actions_match = ACTIONS_RE.search(content)
    if actions_match:
        suggested_actions = [
            line.strip() for line in actions_match.group(1).split("\n") if line.strip()
        ]
    else:
        suggested_actions = []
        defaulted.add("suggested_actions")

    decision = AgentDecision(
        should_handle=should_handle,
        confidence=confidence,
        reasoning=reasoning,
        suggested_actions=suggested_actions,
        escalate=escalate,
    )
    return ParsedReply(decision=decision, defaulted=frozenset(defaulted))


def parse_conflict_reply(content: str) -> ConflictResolution:
    """Read the supervisor's ASSIGNED_AGENT / PRIORITY / REASONING reply"""
    content = _require_text(content)
    defaulted = set()

    agent_match = ASSIGNED_AGENT_RE.search(content)
    assigned_agent = agent_match.group(1) if agent_match else None
    if assigned_agent is None:
        defaulted.add("assigned_agent")

    priority_match = PRIORITY_RE.search(content)
    priority = priority_match.group(1) if priority_match else None
    if priority is None:
        defaulted.add("priority")

    reasoning_match = REASONING_RE.search(content)
    if reasoning_match:
        reasoning = reasoning_match.group(1).strip()
    else:
        reasoning = DEFAULT_CONFLICT_REASONING
        defaulted.add("reasoning")

    return ConflictResolution(
        assigned_agent=assigned_agent,
        priority=priority,
        reasoning=reasoning,
        defaulted=frozenset(defaulted),
    )
