from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, FrozenSet, List, Literal, Optional


Priority = Literal["low", "medium", "high", "urgent"]

GENERAL_AGENT = "General"
SPAM_AGENT = "SpamFilter"
SPAM_CATEGORY = "Spam/Low-Priority"


@dataclass(frozen=True)
class Email:
    id: str
    from_address: str
    to_address: str
    subject: str
    body: str
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class AgentDecision:
    should_handle: bool
    confidence: int
    reasoning: str
    suggested_actions: List[str] = field(default_factory=list)
    escalate: bool = False


@dataclass(frozen=True)
class ParsedReply:
    """Decision read from a model reply plus the fields that fell back to defaults"""
    decision: AgentDecision
    defaulted: FrozenSet[str] = frozenset()

    @property
    def model_complied(self) -> bool:
        return not self.defaulted


@dataclass(frozen=True)
class ConflictResolution:
    assigned_agent: Optional[str]
    priority: Optional[str]
    reasoning: str
    defaulted: FrozenSet[str] = frozenset()


@dataclass
class TriageResult:
    email_id: str
    category: str
    priority: Priority
    assigned_agent: str
    summary: str
    suggested_actions: List[str] = field(default_factory=list)
    requires_human_review: bool = False


@dataclass
class TriageState:
    email: Email
    agent_decisions: Dict[str, AgentDecision] = field(default_factory=dict)
    final_result: Optional[TriageResult] = None
