"""
Triage Reporting
Aggregates batch results and renders the console report
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .models import Email, TriageResult


@dataclass
class TriageSummary:
    """Counts over one batch of triage results"""
    total: int = 0
    by_agent: Dict[str, int] = field(default_factory=dict)
    by_priority: Dict[str, int] = field(default_factory=dict)
    requires_review: int = 0


def summarize(results: Iterable[TriageResult]) -> TriageSummary:
    summary = TriageSummary()
    for result in results:
        summary.total += 1
        summary.by_agent[result.assigned_agent] = summary.by_agent.get(result.assigned_agent, 0) + 1
        summary.by_priority[result.priority] = summary.by_priority.get(result.priority, 0) + 1
        if result.requires_human_review:
            summary.requires_review += 1
    return summary


def format_email_header(email: Email, index: int, total: int) -> str:
    preview = email.body[:100]
    return f"""
📨 Email {index}/{total}
From: {email.from_address}
Subject: {email.subject}
Preview: {preview}...
{'─' * 50}"""


def format_result(result: TriageResult) -> str:
    lines = [
        "✅ TRIAGE RESULT:",
        f"   Category: {result.category}",
        f"   Priority: {result.priority.upper()}",
        f"   Assigned to: {result.assigned_agent}",
        f"   Summary: {result.summary}",
    ]
    if result.suggested_actions:
        lines.append(f"   Actions: {', '.join(result.suggested_actions)}")
    if result.requires_human_review:
        lines.append("   ⚠️  Requires human review")
    return "\n".join(lines)


def format_summary(summary: TriageSummary) -> str:
    lines: List[str] = [
        "📊 TRIAGE SUMMARY",
        "==================",
        f"Total emails processed: {summary.total}",
        "",
        "By Agent:",
    ]
    for agent, count in summary.by_agent.items():
        lines.append(f"  {agent}: {count} emails")

    lines += ["", "By Priority:"]
    for priority, count in summary.by_priority.items():
        lines.append(f"  {priority.upper()}: {count} emails")

    lines += ["", f"Emails requiring human review: {summary.requires_review}"]
    return "\n".join(lines)
