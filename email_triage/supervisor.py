"""
Supervisor Agent - Runs the specialists over an email and picks one destination
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from .config import AppConfig, TriageConfig
from .experts import KeywordSpamFilter, SpamFilterAgent, default_specialists
from .llm import ChatClient, OpenAIChatClient
from .models import (
    AgentDecision,
    Email,
    GENERAL_AGENT,
    Priority,
    SPAM_CATEGORY,
    TriageResult,
    TriageState,
)
from .parsing import parse_conflict_reply

logger = logging.getLogger(__name__)


class Evaluator(Protocol):
    name: str

    def evaluate(self, email: Email) -> AgentDecision:
        ...


WillingAgents = List[Tuple[str, AgentDecision]]


def determine_priority(decision: AgentDecision) -> Priority:
    """Priority ladder for a single willing agent; escalation outranks confidence"""
    if decision.escalate:
        return "urgent"
    if decision.confidence > 90:
        return "high"
    if decision.confidence > 70:
        return "medium"
    return "low"


def _degraded(agent: Evaluator, detail: str) -> AgentDecision:
    make = getattr(agent, "degraded_decision", None)
    if make is not None:
        return make(detail)
    return AgentDecision(
        should_handle=False,
        confidence=0,
        reasoning=f"Error occurred during evaluation: {detail}",
    )


SUPERVISOR_SYSTEM_PROMPT = (
    "You are a Supervisor Agent. Several specialist agents want to handle the same "
    "email and you need to decide which specialist should handle it."
)


class SupervisorAgent:
    """
    Orchestrates triage for one email at a time.

    The spam filter runs first and can end triage on its own. Otherwise the
    specialists run concurrently on a private thread pool and their decisions
    are reduced to a single TriageResult. When more than one specialist is
    willing, the chat client is asked to pick between them.
    """

    def __init__(
        self,
        client: ChatClient,
        spam_filter: Optional[Evaluator] = None,
        specialists: Optional[Sequence[Evaluator]] = None,
        config: Optional[TriageConfig] = None,
        temperature: float = 0.2,
    ):
        self.client = client
        self.spam_filter = spam_filter if spam_filter is not None else SpamFilterAgent(client)
        self.specialists = (
            tuple(specialists) if specialists is not None else default_specialists(client)
        )
        self.config = config or TriageConfig()
        self.temperature = temperature

        names = [self.spam_filter.name] + [agent.name for agent in self.specialists]
        if len(set(names)) != len(names):
            raise ValueError(f"Evaluator names must be unique: {names}")
        if GENERAL_AGENT in names:
            raise ValueError(f"'{GENERAL_AGENT}' is reserved for unrouted email")

        self._executor = self._new_executor()

    def _new_executor(self) -> ThreadPoolExecutor:
        # one slot per specialist plus the conflict call
        return ThreadPoolExecutor(
            max_workers=len(self.specialists) + 1,
            thread_name_prefix="triage",
        )

    def _replace_executor(self) -> None:
        """
        Abandon the current pool to calls that overran their wait.

        A running future cannot be cancelled, so its worker stays busy until
        the call returns. The next email gets a pool with every slot free.
        """
        self._executor.shutdown(wait=False)
        self._executor = self._new_executor()

    def close(self) -> None:
        self._executor.shutdown(wait=False)

    def __enter__(self) -> "SupervisorAgent":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def triage_email(self, email: Email) -> TriageResult:
        """Spam check, then specialist evaluation, then the routing decision"""
        logger.info("Starting triage for email %s: %r", email.id, email.subject)
        state = TriageState(email=email)

        spam_decision = self.spam_filter.evaluate(email)
        state.agent_decisions[self.spam_filter.name] = spam_decision

        if spam_decision.should_handle and spam_decision.confidence > self.config.spam_threshold:
            logger.info("Email %s identified as spam/low-priority", email.id)
            result = self.create_triage_result(
                state, SPAM_CATEGORY, "low", self.spam_filter.name
            )
        else:
            state.agent_decisions.update(self._evaluate_specialists(email))
            result = self._make_routing_decision(state)

        state.final_result = result
        logger.info(
            "Email %s routed to %s (%s)", email.id, result.assigned_agent, result.priority
        )
        return result

    def _evaluate_specialists(self, email: Email) -> Dict[str, AgentDecision]:
        futures = {
            agent.name: self._executor.submit(agent.evaluate, email)
            for agent in self.specialists
        }
        timeout = self.config.evaluation_timeout_seconds
        done, pending = wait(list(futures.values()), timeout=timeout)
        if pending:
            self._replace_executor()

        decisions: Dict[str, AgentDecision] = {}
        for agent in self.specialists:
            future = futures[agent.name]
            if future not in done:
                future.cancel()
                logger.warning(
                    "%s did not finish within %ss for email %s", agent.name, timeout, email.id
                )
                decisions[agent.name] = _degraded(agent, f"timed out after {timeout}s")
                continue
            try:
                decisions[agent.name] = future.result()
            except Exception as exc:
                logger.warning("%s raised for email %s: %s", agent.name, email.id, exc)
                decisions[agent.name] = _degraded(agent, str(exc))
        return decisions

    def _make_routing_decision(self, state: TriageState) -> TriageResult:
        willing = self.willing_agents(state)
        logger.info(
            "Agents willing to handle email %s: %s",
            state.email.id,
            ", ".join(f"{name}({d.confidence}%)" for name, d in willing) or "none",
        )

        if not willing:
            return self.create_triage_result(state, GENERAL_AGENT, "medium", GENERAL_AGENT, True)

        if len(willing) == 1:
            name, decision = willing[0]
            return self.create_triage_result(
                state, name, determine_priority(decision), name, decision.escalate
            )

        return self._resolve_conflict(state, willing)

    def willing_agents(self, state: TriageState) -> WillingAgents:
        """
        Evaluators that want the email, highest confidence first.

        The spam filter counts too: a spam verdict at or under the spam
        threshold can still win the email. Equal confidences keep evaluation
        order (spam filter, then specialists), since ``sorted`` is stable.
        """
        candidates = [
            (name, decision)
            for name, decision in state.agent_decisions.items()
            if decision.should_handle
            and decision.confidence > self.config.handle_threshold
        ]
        return sorted(candidates, key=lambda item: item[1].confidence, reverse=True)

    def _resolve_conflict(self, state: TriageState, willing: WillingAgents) -> TriageResult:
        email = state.email
        fallback_agent = willing[0][0]
        prompt = self._build_conflict_prompt(email, willing)

        future = self._executor.submit(
            self.client.complete, SUPERVISOR_SYSTEM_PROMPT, prompt, self.temperature
        )
        try:
            resolution = parse_conflict_reply(
                future.result(timeout=self.config.conflict_timeout_seconds)
            )
        except Exception as exc:
            if not future.cancel() and not future.done():
                self._replace_executor()
            logger.error("Error in conflict resolution for email %s: %r", email.id, exc)
            return self.create_triage_result(state, fallback_agent, "medium", fallback_agent, False)

        agent = resolution.assigned_agent
        names = [name for name, _ in willing]
        if agent not in names:
            logger.warning(
                "Supervisor reply named %r, not one of %s; using %s",
                agent,
                names,
                fallback_agent,
            )
            agent = fallback_agent

        priority = resolution.priority or "medium"
        logger.info("Supervisor resolved conflict: %s (%s)", agent, resolution.reasoning)
        return self.create_triage_result(
            state, agent, priority, agent, state.agent_decisions[agent].escalate
        )

    def _build_conflict_prompt(self, email: Email, willing: WillingAgents) -> str:
        agent_analysis = "\n".join(
            f"{name}: {decision.reasoning} (Confidence: {decision.confidence}%)"
            for name, decision in willing
        )
        return f"""Decide which specialist should handle this email.

EMAIL DETAILS:
FROM: {email.from_address}
SUBJECT: {email.subject}
BODY: {email.body}

AGENT ANALYSES:
{agent_analysis}

Based on the email content and agent analyses, decide which agent should handle this email.
Consider:
1. Which agent's expertise best matches the email content?
2. Which agent has the highest confidence and best reasoning?
3. What is the appropriate priority level?

Respond in this exact format:
ASSIGNED_AGENT: [AgentName]
PRIORITY: [low/medium/high/urgent]
REASONING: [Brief explanation]"""

    def create_triage_result(
        self,
        state: TriageState,
        category: str,
        priority: Priority,
        assigned_agent: str,
        requires_human_review: bool = False,
    ) -> TriageResult:
        """
        Summary and actions come from the assigned agent's decision. Only
        an agent with no decision (General) gets the route action; an empty
        action list from a real decision is kept as is.
        """
        decision = state.agent_decisions.get(assigned_agent)
        if decision is not None and decision.reasoning:
            summary = decision.reasoning
        else:
            summary = f"Email categorized as {category}"
        if decision is not None:
            actions = list(decision.suggested_actions)
        else:
            actions = [f"Route to {assigned_agent} team"]

        return TriageResult(
            email_id=state.email.id,
            category=category,
            priority=priority,
            assigned_agent=assigned_agent,
            summary=summary,
            suggested_actions=actions,
            requires_human_review=requires_human_review,
        )


def build_supervisor(cfg: AppConfig) -> SupervisorAgent:
    """Wire the OpenAI-backed agents from configuration"""
    client = OpenAIChatClient(
        api_key=cfg.openai.api_key,
        model=cfg.openai.model,
        timeout=cfg.openai.timeout_seconds,
    )
    temperature = cfg.openai.evaluator_temperature
    if cfg.triage.spam_filter == "keywords":
        spam_filter = KeywordSpamFilter()
    else:
        spam_filter = SpamFilterAgent(client, temperature)

    return SupervisorAgent(
        client,
        spam_filter=spam_filter,
        specialists=default_specialists(client, temperature),
        config=cfg.triage,
        temperature=cfg.openai.supervisor_temperature,
    )
