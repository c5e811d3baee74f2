"""Summary lines for add and remove outcomes."""

from typing import List, Tuple, Union

from mcp_patterns.core.models import AddOutcome, RemoveOutcome

NOTHING_TO_DO = "nothing to do"


def _join(parts: List[Tuple[int, str]]) -> str:
    text = ", ".join(f"{count} {label}" for count, label in parts if count > 0)
    return text or NOTHING_TO_DO


def summarize_add(outcome: AddOutcome) -> str:
    """e.g. '3 installed, 1 skipped (already installed), 1 failed'."""
    return _join([
        (len(outcome.installed), "installed"),
        (len(outcome.skipped_already_installed), "skipped (already installed)"),
        (len(outcome.skipped_unavailable), "skipped (Docker unavailable)"),
        (len(outcome.failed), "failed"),
    ])


def summarize_remove(outcome: RemoveOutcome) -> str:
    """e.g. '2 removed, 1 not installed'."""
    return _join([
        (len(outcome.removed), "removed"),
        (len(outcome.not_installed), "not installed"),
    ])


def summarize(outcome: Union[AddOutcome, RemoveOutcome]) -> str:
    """Summary line for either kind of outcome."""
    if isinstance(outcome, RemoveOutcome):
        return summarize_remove(outcome)
    return summarize_add(outcome)
