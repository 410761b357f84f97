"""Checkbox selection of arrived candidates for bulk onboarding."""

from typing import Dict, Iterable, List, Optional

from onboarding.models import Candidate, CandidateStatus


class SelectionModel:
    """Set of candidate ids checked for a bulk action.

    Only ``arrived`` candidates may be selected. Ids whose candidate has
    moved on (or disappeared) are pruned on every read through ``ids``.
    """

    def __init__(self):
        self._selected: Dict[str, None] = {}

    def toggle(self, candidate: Candidate, selected: Optional[bool] = None) -> bool:
        """Flip (or set) the selection of one candidate.

        Returns:
            Whether the candidate is selected afterwards
        """
        if selected is None:
            selected = candidate.id not in self._selected

        if selected and candidate.status == CandidateStatus.ARRIVED:
            self._selected[candidate.id] = None
            return True

        self._selected.pop(candidate.id, None)
        return False

    def select_all(self, visible: Iterable[Candidate], selected: bool = True) -> List[str]:
        """Select every eligible candidate in ``visible``, or clear the selection.

        ``visible`` is the currently filtered list; only its arrived
        candidates are selected and the previous selection is replaced.
        """
        self._selected = {}
        if selected:
            for candidate in visible:
                if candidate.status == CandidateStatus.ARRIVED:
                    self._selected[candidate.id] = None
        return list(self._selected)

    def clear(self) -> None:
        self._selected = {}

    def ids(self, candidates: Iterable[Candidate]) -> List[str]:
        """Current selection, pruned against the latest candidate records."""
        arrived = {c.id for c in candidates if c.status == CandidateStatus.ARRIVED}
        self._selected = {cid: None for cid in self._selected if cid in arrived}
        return list(self._selected)
