"""
GitHub Actions Reporter

Formats check results as run-log lines, workflow commands and
step summary markdown.
"""

import logging
import sys
from typing import Optional, TextIO

from ..models.event import PullRequestEvent
from ..models.result import CheckOutcome, CheckResult


logger = logging.getLogger(__name__)


class ActionsReporter:
    """
    Reports check results to a GitHub Actions run.

    The reason is always written verbatim as its own log line; the workflow
    command and step summary are additions for the Actions UI.
    """

    title = "CHANGELOG Check"

    def __init__(self, annotations: bool = True):
        """
        Initialize reporter.

        Args:
            annotations: Whether to emit ::error:: / ::notice:: commands
        """
        self.annotations = annotations

    def format_log_line(self, result: CheckResult) -> str:
        """Plain run-log message."""
        return result.reason

    def format_workflow_command(self, result: CheckResult) -> str:
        """Workflow command that annotates the run."""
        command = "notice" if result.passed else "error"
        return f"::{command} title={self._escape_property(self.title)}::{self._escape_data(result.reason)}"

    def format_step_summary(self, result: CheckResult, event: Optional[PullRequestEvent] = None) -> str:
        """Markdown block for GITHUB_STEP_SUMMARY."""
        icon = {
            CheckOutcome.UPDATED: "✅",
            CheckOutcome.SKIPPED: "⏭️",
            CheckOutcome.MISSING: "❌",
        }[result.outcome]

        lines = [f"### {self.title}", "", f"{icon} {result.reason}"]

        if event is not None:
            lines.append("")
            if event.repository and event.pr_number:
                lines.append(f"- Pull request: `{event.repository}#{event.pr_number}`")
            lines.append(f"- Event: `{event.event_type.value}`")
            if event.labels:
                labels = ", ".join(f"`{label}`" for label in sorted(event.labels))
                lines.append(f"- Labels: {labels}")
            if result.outcome is not CheckOutcome.SKIPPED:
                lines.append(f"- Changed files: {len(event.changed_paths)}")

        return "\n".join(lines) + "\n"

    def report(
        self,
        result: CheckResult,
        event: Optional[PullRequestEvent] = None,
        stream: Optional[TextIO] = None,
        summary_path: Optional[str] = None,
    ) -> None:
        """
        Write the result to the run log and, if configured, the step summary.

        Args:
            result: Check result to report
            event: Event that was evaluated, for summary context
            stream: Output stream (default: stdout)
            summary_path: Path of the GITHUB_STEP_SUMMARY file
        """
        stream = stream or sys.stdout
        print(self.format_log_line(result), file=stream)
        if self.annotations:
            print(self.format_workflow_command(result), file=stream)

        if summary_path:
            try:
                with open(summary_path, 'a', encoding='utf-8') as f:
                    f.write(self.format_step_summary(result, event))
            except OSError as e:
                logger.warning(f"Could not write step summary to {summary_path}: {e}")

    @staticmethod
    def _escape_data(value: str) -> str:
        return value.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')

    @classmethod
    def _escape_property(cls, value: str) -> str:
        return cls._escape_data(value).replace(':', '%3A').replace(',', '%2C')
