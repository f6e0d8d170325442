"""Clinic, doctor and lab identity settings loaded from YAML."""
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class IdentitySettings(BaseModel):
    """Read-only identity settings; any field may be omitted."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    clinic_name: str | None = None
    clinic_address: str | None = None
    clinic_location: str | None = None
    clinic_phone: str | None = None
    clinic_website: str | None = None
    clinic_logo: str | None = None  # file path or data URI

    doctor_name: str | None = None
    doctor_qualifications: str | None = None
    doctor_reg_no: str | None = None
    doctor_specialization: str | None = None

    lab_name: str | None = None
    lab_address: str | None = None
    lab_phone: str | None = None

    # TTF font for non latin-1 text such as the rupee sign
    font_path: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "IdentitySettings":
        """Create from dictionary."""
        return cls.model_validate(data or {})


def load_settings(path: Path | None = None) -> IdentitySettings:
    """Load identity settings from a YAML file, defaults when no path is given."""
    if path is None:
        return IdentitySettings()
    with open(path) as f:
        data = yaml.safe_load(f)
    return IdentitySettings.from_dict(data)
