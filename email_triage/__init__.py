"""Multi-Agent Email Triage package."""

__all__ = [
    "__version__",
    "Email",
    "AgentDecision",
    "TriageResult",
    "TriageState",
    "SupervisorAgent",
    "CustomerSupportAgent",
    "SalesAgent",
    "HRAgent",
    "SpamFilterAgent",
    "KeywordSpamFilter",
    "OpenAIChatClient",
    "triage_batch",
]

__version__ = "0.1.0"

from .models import Email, AgentDecision, TriageResult, TriageState
from .supervisor import SupervisorAgent
from .experts import CustomerSupportAgent, SalesAgent, HRAgent, SpamFilterAgent, KeywordSpamFilter
from .llm import OpenAIChatClient
from .runner import triage_batch
