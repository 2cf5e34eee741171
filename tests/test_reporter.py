from email_triage.models import TriageResult
from email_triage.reporter import format_result, format_summary, summarize


def _result(email_id, agent, priority, review=False):
    return TriageResult(
        email_id=email_id,
        category=agent,
        priority=priority,
        assigned_agent=agent,
        summary=f"{agent} summary",
        suggested_actions=[f"Route to {agent} team"],
        requires_human_review=review,
    )


def test_summarize_counts():
    summary = summarize(
        [
            _result("1", "CustomerSupport", "urgent", review=True),
            _result("2", "Sales", "high", review=True),
            _result("3", "SpamFilter", "low"),
            _result("4", "CustomerSupport", "high"),
        ]
    )

    assert summary.total == 4
    assert summary.by_agent == {"CustomerSupport": 2, "Sales": 1, "SpamFilter": 1}
    assert summary.by_priority == {"urgent": 1, "high": 2, "low": 1}
    assert summary.requires_review == 2


def test_summarize_empty():
    summary = summarize([])
    assert summary.total == 0
    assert summary.by_agent == {}


def test_format_summary():
    text = format_summary(summarize([_result("1", "HR", "medium")]))

    assert "Total emails processed: 1" in text
    assert "  HR: 1 emails" in text
    assert "  MEDIUM: 1 emails" in text
    assert "Emails requiring human review: 0" in text


def test_format_result_flags_review():
    text = format_result(_result("1", "Sales", "high", review=True))

    assert "Priority: HIGH" in text
    assert "Actions: Route to Sales team" in text
    assert "Requires human review" in text
