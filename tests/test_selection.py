from onboarding.listing import CandidateFilter
from onboarding.models import CandidateStatus
from onboarding.selection import SelectionModel

from conftest import make_candidate


def _candidates():
    return [
        make_candidate("c1", nationality="Philippines", name="Jose Rizal"),
        make_candidate("c2", nationality="Bangladesh", name="Rahim Uddin"),
        make_candidate("c3", nationality="Philippines", name="Maria Santos"),
        make_candidate("e1", status=CandidateStatus.EMPLOYEE, name="Ravi Kumar"),
    ]


def test_toggle_flips_selection():
    candidates = _candidates()
    selection = SelectionModel()

    assert selection.toggle(candidates[0]) is True
    assert selection.ids(candidates) == ["c1"]
    assert selection.toggle(candidates[0]) is False
    assert selection.ids(candidates) == []


def test_toggle_with_explicit_state():
    candidates = _candidates()
    c1 = candidates[0]
    selection = SelectionModel()

    selection.toggle(c1, True)
    selection.toggle(c1, True)
    assert selection.ids(candidates) == ["c1"]

    selection.toggle(c1, False)
    assert selection.ids(candidates) == []


def test_non_arrived_candidates_cannot_be_selected():
    candidates = _candidates()
    selection = SelectionModel()

    assert selection.toggle(candidates[3], True) is False
    assert selection.ids(candidates) == []


def test_select_all_uses_visible_arrived_candidates():
    candidates = _candidates()
    selection = SelectionModel()
    visible = CandidateFilter(nationality="Philippines").apply(candidates)

    ids = selection.select_all(visible)

    assert ids == ["c1", "c3"]


def test_select_all_skips_employees_and_replaces_selection():
    candidates = _candidates()
    selection = SelectionModel()
    selection.toggle(candidates[1], True)

    ids = selection.select_all(CandidateFilter(search="r").apply(candidates))

    # "r" matches Jose Rizal, Rahim Uddin, Maria Santos and Ravi Kumar
    assert ids == ["c1", "c2", "c3"]


def test_select_all_false_clears():
    candidates = _candidates()
    selection = SelectionModel()
    selection.select_all(candidates)

    assert selection.select_all(candidates, selected=False) == []
    assert selection.ids(candidates) == []


def test_ids_prune_candidates_that_moved_on():
    candidates = _candidates()
    selection = SelectionModel()
    selection.select_all(candidates)
    assert selection.ids(candidates) == ["c1", "c2", "c3"]

    # c2 was one-click onboarded while still checked
    candidates[1].status = CandidateStatus.EMPLOYEE

    assert selection.ids(candidates) == ["c1", "c3"]
    # Pruned for good, even if a later list still shows it arrived
    candidates[1].status = CandidateStatus.ARRIVED
    assert selection.ids(candidates) == ["c1", "c3"]


def test_selected_candidate_that_became_employee_is_not_reported():
    candidates = _candidates()
    selection = SelectionModel()
    selection.toggle(candidates[0], True)

    candidates[0].status = CandidateStatus.EMPLOYEE

    assert selection.ids(candidates) == []


def test_ids_prune_deleted_candidates():
    candidates = _candidates()
    selection = SelectionModel()
    selection.select_all(candidates)

    assert selection.ids(candidates[:1]) == ["c1"]


def test_clear():
    selection = SelectionModel()
    selection.select_all(_candidates())

    selection.clear()

    assert selection.ids(_candidates()) == []
