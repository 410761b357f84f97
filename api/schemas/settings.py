"""Pydantic schemas for Settings endpoints."""

from typing import Optional

from .base import CamelModel


class SalaryRangeSchema(CamelModel):
    min: int
    max: int


class OnboardingSettingsResponse(CamelModel):
    """Schema for the one-click onboarding settings."""

    default_department: str
    default_salary_range: SalaryRangeSchema
    default_work_location: str
    auto_assign_manager: bool
    enable_bulk_onboarding: bool
    require_approval: bool


class OnboardingSettingsUpdate(CamelModel):
    """Schema for updating settings (all fields optional)."""

    default_department: Optional[str] = None
    default_salary_range: Optional[SalaryRangeSchema] = None
    default_work_location: Optional[str] = None
    auto_assign_manager: Optional[bool] = None
    enable_bulk_onboarding: Optional[bool] = None
    require_approval: Optional[bool] = None


class DepartmentOption(CamelModel):
    id: str
    name: str
    default_salary: int


class CatalogResponse(CamelModel):
    """Presets offered in the settings dialog."""

    departments: list[DepartmentOption]
    work_locations: list[str]
    salary_by_nationality: dict[str, SalaryRangeSchema]
    default_salary_band: SalaryRangeSchema
