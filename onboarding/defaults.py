"""Smart defaults for one-click onboarding.

Maps a candidate's nationality and declared position, plus the current
onboarding settings, to a concrete employment package. Every lookup is a
total function with an explicit fallback.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from onboarding.models import Candidate, OnboardingPackage, OnboardingSettings, SalaryRange


@dataclass(frozen=True)
class DepartmentPreset:
    id: str
    name: str
    default_salary: int


DEPARTMENTS: List[DepartmentPreset] = [
    DepartmentPreset("construction", "Construction", 15000),
    DepartmentPreset("maintenance", "Maintenance", 12000),
    DepartmentPreset("engineering", "Engineering", 25000),
    DepartmentPreset("administration", "Administration", 18000),
    DepartmentPreset("security", "Security", 10000),
    DepartmentPreset("housekeeping", "Housekeeping", 8000),
]

WORK_LOCATIONS: List[str] = [
    "Site A - Main Construction",
    "Site B - Maintenance Hub",
    "Head Office - Male",
    "Training Center",
    "Warehouse - Hulhumale",
]

SALARY_BY_NATIONALITY: Dict[str, SalaryRange] = {
    "Bangladesh": SalaryRange(min=8000, max=15000),
    "India": SalaryRange(min=10000, max=18000),
    "Nepal": SalaryRange(min=9000, max=16000),
    "Pakistan": SalaryRange(min=8500, max=14000),
    "Sri Lanka": SalaryRange(min=12000, max=20000),
    "Philippines": SalaryRange(min=15000, max=25000),
}

DEFAULT_SALARY_BAND = SalaryRange(min=10000, max=15000)
DEFAULT_DESIGNATION = "General Worker"
AUTO_ASSIGN_MANAGER = "auto-assign"


def lookup_department(department_id: str) -> DepartmentPreset:
    """Department preset for ``department_id``, else the first catalog entry."""
    for preset in DEPARTMENTS:
        if preset.id == department_id:
            return preset
    return DEPARTMENTS[0]


def lookup_salary_band(nationality: str) -> SalaryRange:
    """Salary band for ``nationality``, else the default 10000-15000 band."""
    return SALARY_BY_NATIONALITY.get(nationality, DEFAULT_SALARY_BAND)


def salary_for_position(band: SalaryRange, position: Optional[str]) -> int:
    """Pick a salary inside ``band`` from the declared position text.

    Engineers get the top of the band, supervisors the midpoint, everyone
    else the bottom.
    """
    text = (position or "").lower()
    if "engineer" in text:
        return band.max
    if "supervisor" in text:
        return band.midpoint
    return band.min


class SmartDefaultsResolver:
    """Resolves the one-click onboarding package for a candidate."""

    def resolve(
        self,
        candidate: Candidate,
        settings: OnboardingSettings,
        today: date,
    ) -> OnboardingPackage:
        """Compute the package for ``candidate`` as of ``today``.

        Args:
            candidate: Candidate being onboarded
            settings: Current onboarding settings (read on every call)
            today: Date the resolution is performed

        Returns:
            Resolved onboarding package
        """
        department = lookup_department(settings.default_department)
        band = lookup_salary_band(candidate.nationality)

        return OnboardingPackage(
            department=department.name,
            designation=candidate.position or DEFAULT_DESIGNATION,
            salary=salary_for_position(band, candidate.position),
            work_location=settings.default_work_location,
            manager_id=AUTO_ASSIGN_MANAGER if settings.auto_assign_manager else "",
            start_date=today,
            notes=f"One-click onboarded from {candidate.nationality} - {today.isoformat()}",
        )


def catalog() -> dict:
    """Catalog of presets offered in the settings screen."""
    return {
        "departments": [
            {"id": d.id, "name": d.name, "default_salary": d.default_salary}
            for d in DEPARTMENTS
        ],
        "work_locations": list(WORK_LOCATIONS),
        "salary_by_nationality": {
            nationality: {"min": band.min, "max": band.max}
            for nationality, band in SALARY_BY_NATIONALITY.items()
        },
        "default_salary_band": {"min": DEFAULT_SALARY_BAND.min, "max": DEFAULT_SALARY_BAND.max},
    }
