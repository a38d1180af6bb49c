"""
Prospect Domain Models
Read-only inputs to the calling-list generator
"""
from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import datetime


class Coordinates(BaseModel):
    """A latitude/longitude pair in decimal degrees"""
    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(..., ge=-180, le=180, allow_inf_nan=False)


def _check_coordinate_pair(lat: Optional[float], lng: Optional[float], label: str) -> None:
    if (lat is None) != (lng is None):
        raise ValueError(f"{label} latitude and longitude must both be set or both be empty")


class Prospect(BaseModel):
    """Business the field team is trying to book"""
    id: str
    business_name: str = ""
    phone_number: Optional[str] = None
    territory: str
    specialty: str = "Other"
    last_contact_date: Optional[datetime] = None
    last_call_outcome: Optional[str] = None
    address_lat: Optional[float] = Field(default=None, ge=-90, le=90, allow_inf_nan=False)
    address_lng: Optional[float] = Field(default=None, ge=-180, le=180, allow_inf_nan=False)
    priority_score: Optional[int] = None

    model_config = {"from_attributes": True}

    @model_validator(mode="after")
    def _coordinates_all_or_nothing(self) -> "Prospect":
        _check_coordinate_pair(self.address_lat, self.address_lng, "Prospect")
        return self

    @property
    def coordinates(self) -> Optional[Coordinates]:
        if self.address_lat is None or self.address_lng is None:
            return None
        return Coordinates(lat=self.address_lat, lng=self.address_lng)


class FieldRep(BaseModel):
    """Field representative who visits prospects in one territory"""
    id: str
    name: str = ""
    territory: str
    home_lat: Optional[float] = Field(default=None, ge=-90, le=90, allow_inf_nan=False)
    home_lng: Optional[float] = Field(default=None, ge=-180, le=180, allow_inf_nan=False)

    model_config = {"from_attributes": True}

    @model_validator(mode="after")
    def _coordinates_all_or_nothing(self) -> "FieldRep":
        _check_coordinate_pair(self.home_lat, self.home_lng, "Field rep home")
        return self

    @property
    def home_coordinates(self) -> Optional[Coordinates]:
        """
        Home base used as the routing origin.

        A zero latitude or longitude is treated the same as a missing one:
        reps created before geocoding carry 0/0 placeholders.
        """
        if not self.home_lat or not self.home_lng:
            return None
        return Coordinates(lat=self.home_lat, lng=self.home_lng)


class ScoredProspect(BaseModel):
    """Prospect paired with its priority score (100-300)"""
    prospect: Prospect
    score: int = Field(..., ge=100, le=300)
