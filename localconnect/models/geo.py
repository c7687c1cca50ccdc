from typing import Literal

from pydantic import BaseModel, field_validator


class GeoPoint(BaseModel):
    """GeoJSON point; coordinates are ``[lng, lat]``."""

    type: Literal["Point"] = "Point"
    coordinates: list[float]

    @field_validator("coordinates")
    @classmethod
    def validate_coordinates(cls, value: list[float]) -> list[float]:
        if len(value) != 2:
            raise ValueError("coordinates must be [lng, lat].")
        lng, lat = value
        if not -180.0 <= lng <= 180.0:
            raise ValueError("Longitude must be between -180 and 180.")
        if not -90.0 <= lat <= 90.0:
            raise ValueError("Latitude must be between -90 and 90.")
        return value
