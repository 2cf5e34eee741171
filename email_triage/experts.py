"""
Expert Agents - Specialists that score an email against one domain
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from .llm import ChatClient
from .models import AgentDecision, Email, SPAM_AGENT
from .parsing import parse_agent_reply

logger = logging.getLogger(__name__)


class SpecialistAgent:
    """
    Base class for LLM-backed specialists.

    Subclasses provide the system prompt, the question put to the model,
    the factors the model should weigh and the hints shown next to the
    SHOULD_HANDLE and ESCALATE labels.
    """

    name = ""
    task = ""
    considerations: Sequence[str] = ()
    should_handle_hint = "true/false"
    escalate_hint = "true/false"
    escalate_on_failure = False

    def __init__(self, client: ChatClient, temperature: float = 0.1):
        self.client = client
        self.temperature = temperature

    def evaluate(self, email: Email) -> AgentDecision:
        """
        Ask the model whether this specialist should take the email.

        Never raises: a failed call or an empty reply gives the degraded
        decision from ``degraded_decision``.
        """
        try:
            content = self.client.complete(
                self._get_system_prompt(),
                self._build_prompt(email),
                self.temperature,
            )
            parsed = parse_agent_reply(content)
        except Exception as exc:
            logger.warning("Error in %s evaluation for email %s: %s", self.name, email.id, exc)
            return self.degraded_decision(str(exc))

        if not parsed.model_complied:
            logger.debug(
                "%s reply for email %s fell back to defaults for: %s",
                self.name,
                email.id,
                ", ".join(sorted(parsed.defaulted)),
            )
        return parsed.decision

    def degraded_decision(self, detail: str) -> AgentDecision:
        return AgentDecision(
            should_handle=False,
            confidence=0,
            reasoning=f"Error occurred during evaluation: {detail}",
            suggested_actions=[],
            escalate=self.escalate_on_failure,
        )

    def _get_system_prompt(self) -> str:
        raise NotImplementedError

    def _build_prompt(self, email: Email) -> str:
        factors = "\n".join(
            f"{i}. {factor}" for i, factor in enumerate(self.considerations, start=1)
        )
        return f"""Analyze this email and determine if it {self.task}:

FROM: {email.from_address}
SUBJECT: {email.subject}
BODY: {email.body}

Consider these factors:
{factors}

Respond with your analysis in this format:
SHOULD_HANDLE: {self.should_handle_hint}
CONFIDENCE: 0-100
REASONING: Brief explanation
SUGGESTED_ACTIONS: List of recommended actions
ESCALATE: {self.escalate_hint}"""


class CustomerSupportAgent(SpecialistAgent):
    """Technical issues, outages and service requests"""

    name = "CustomerSupport"
    task = "should be handled by the Customer Support team"
    considerations = (
        "Is this a customer support request?",
        "Does it involve technical issues or service problems?",
        "Does the customer need assistance or resolution?",
        "What is the urgency level?",
    )
    escalate_hint = "true/false (if requires immediate escalation)"
    escalate_on_failure = True

    def _get_system_prompt(self) -> str:
        return (
            "You are a Customer Support Agent specializing in handling customer support "
            "requests, technical issues, and service-related inquiries."
        )


class SalesAgent(SpecialistAgent):
    """Sales inquiries, lead qualification and business development"""

    name = "Sales"
    task = "should be handled by the Sales team"
    considerations = (
        "Is this a sales inquiry or business opportunity?",
        "Does the sender show buying intent?",
        "Is this a potential lead that could convert?",
        "What is the business value potential?",
    )
    escalate_hint = "true/false (if high-value lead requiring immediate attention)"

    def _get_system_prompt(self) -> str:
        return (
            "You are a Sales Agent specializing in handling sales inquiries, lead "
            "qualification, and business development opportunities."
        )


class HRAgent(SpecialistAgent):
    """Recruitment, employee matters and internal communications"""

    name = "HR"
    task = "should be handled by the HR team"
    considerations = (
        "Is this related to recruitment, hiring, or candidate inquiries?",
        "Does it involve employee relations or internal communications?",
        "Is it about benefits, payroll, or company policies?",
        "Should HR be involved in this communication?",
    )
    escalate_hint = "true/false (if requires senior HR attention)"

    def _get_system_prompt(self) -> str:
        return (
            "You are an HR Agent specializing in handling HR-related communications, "
            "recruitment inquiries, employee matters, and internal communications."
        )


class SpamFilterAgent(SpecialistAgent):
    """Spam, newsletters and promotional mail; SHOULD_HANDLE means filter out"""

    name = SPAM_AGENT
    task = "should be filtered out as spam/low-priority"
    considerations = (
        "Is this spam, newsletter, or promotional content?",
        "Is this automated or mass-sent communication?",
        "Does it lack business value or personal relevance?",
        "Should it be filtered to reduce noise?",
    )
    should_handle_hint = "true/false (true if should be filtered out)"
    escalate_hint = "false (spam filter rarely escalates)"

    def _get_system_prompt(self) -> str:
        return (
            "You are a Spam Filter Agent specializing in identifying and filtering out "
            "spam, newsletters, promotional emails, and low-priority communications."
        )


NO_REPLY_MARKERS = ("no-reply", "noreply", "do-not-reply", "donotreply")
BULK_SENDER_MARKERS = ("mailchimp", "hubspot", "substack", "sendgrid", "newsletter", "marketing")
SPAM_PHRASES = (
    "unsubscribe",
    "newsletter",
    "promo",
    "discount",
    "click here",
    "limited time",
)


class KeywordSpamFilter:
    """Rule-based spam filter; makes no outbound calls"""

    name = SPAM_AGENT
    match_confidence = 90
    miss_confidence = 10

    def evaluate(self, email: Email) -> AgentDecision:
        reasons = self._match(email)
        if reasons:
            return AgentDecision(
                should_handle=True,
                confidence=self.match_confidence,
                reasoning="Matched spam indicators: " + "; ".join(reasons),
                suggested_actions=["Archive email", "Skip specialist review"],
                escalate=False,
            )
        return AgentDecision(
            should_handle=False,
            confidence=self.miss_confidence,
            reasoning="No spam indicators found",
            suggested_actions=[],
            escalate=False,
        )

    def _match(self, email: Email) -> List[str]:
        sender = email.from_address.lower()
        text = f"{email.subject} {email.body}".lower()
        reasons: List[str] = []

        if any(marker in sender for marker in NO_REPLY_MARKERS):
            reasons.append(f"no-reply sender {sender}")
        if any(marker in sender for marker in BULK_SENDER_MARKERS):
            reasons.append(f"bulk sender {sender}")
        phrases = [phrase for phrase in SPAM_PHRASES if phrase in text]
        if phrases:
            reasons.append("promotional wording: " + ", ".join(phrases))
        return reasons


def default_specialists(client: ChatClient, temperature: float = 0.1) -> Tuple[SpecialistAgent, ...]:
    """The three specialists in tie-break order"""
    return (
        CustomerSupportAgent(client, temperature),
        SalesAgent(client, temperature),
        HRAgent(client, temperature),
    )
