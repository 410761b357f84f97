from datetime import date

import pytest

from onboarding.listing import CandidateFilter, sort_candidates, summarize, unique_nationalities
from onboarding.models import CandidateStatus, Checklist

from conftest import make_candidate


@pytest.fixture()
def candidates():
    return [
        make_candidate("c1", nationality="Nepal", name="bikash", arrival_date=date(2026, 1, 5)),
        make_candidate("c2", nationality="India", name="Anil", arrival_date=date(2026, 2, 1)),
        make_candidate(
            "o1",
            nationality="India",
            name="Chandra",
            status=CandidateStatus.ONBOARDING,
            checklist=Checklist(document_verification=True, medical_checkup=True),
        ),
        make_candidate("e1", nationality="Nepal", name="Dev", status=CandidateStatus.EMPLOYEE, emp_id="EMP123456"),
    ]


def test_search_matches_name_passport_and_emp_id(candidates):
    assert [c.id for c in CandidateFilter(search="BIK").apply(candidates)] == ["c1"]
    assert [c.id for c in CandidateFilter(search="pc2").apply(candidates)] == ["c2"]
    assert [c.id for c in CandidateFilter(search="emp1234").apply(candidates)] == ["e1"]


def test_status_and_nationality_filters(candidates):
    assert [c.id for c in CandidateFilter(status="arrived").apply(candidates)] == ["c1", "c2"]
    assert [c.id for c in CandidateFilter(nationality="India").apply(candidates)] == ["c2", "o1"]
    assert [
        c.id for c in CandidateFilter(status="employee", nationality="Nepal").apply(candidates)
    ] == ["e1"]
    assert len(CandidateFilter().apply(candidates)) == 4


def test_sort_by_name_is_case_insensitive(candidates):
    ordered = sort_candidates(candidates, "name", "asc")

    assert [c.name for c in ordered] == ["Anil", "bikash", "Chandra", "Dev"]


def test_sort_by_arrival_date_puts_missing_dates_last_when_descending(candidates):
    ordered = sort_candidates(candidates, "arrival_date", "desc")

    assert [c.id for c in ordered[:2]] == ["c2", "c1"]


def test_sort_rejects_unknown_field(candidates):
    with pytest.raises(ValueError):
        sort_candidates(candidates, "salary")


def test_unique_nationalities(candidates):
    assert unique_nationalities(candidates) == ["India", "Nepal"]


def test_summary(candidates):
    summary = summarize(candidates)

    assert summary["total"] == 4
    assert summary["arrived"] == 2
    assert summary["onboarding"] == 1
    assert summary["employee"] == 1
    assert summary["ready_for_one_click"] == 2
    # (0 + 0 + 25 + 100) / 4
    assert summary["completion_rate"] == 31.25


def test_summary_of_empty_pipeline():
    assert summarize([])["completion_rate"] == 0.0
