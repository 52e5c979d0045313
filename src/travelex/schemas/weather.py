"""Weather response schemas (camelCase on the wire)."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models.domain import WeatherAssessment


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WeatherSourcesModel(_CamelModel):
    open_meteo: bool
    weather_api: bool


class WeatherAssessmentModel(_CamelModel):
    is_hazardous: bool
    hazard_details: List[str] = Field(default_factory=list)
    summary: str
    temperature: Optional[float] = Field(None, description="Degrees Celsius.")
    target_date: str
    source: WeatherSourcesModel
    timestamp: str

    @classmethod
    def from_domain(cls, assessment: WeatherAssessment) -> "WeatherAssessmentModel":
        return cls(
            is_hazardous=assessment.is_hazardous,
            hazard_details=list(assessment.hazard_details),
            summary=assessment.summary,
            temperature=assessment.temperature,
            target_date=assessment.target_date,
            source=WeatherSourcesModel(
                open_meteo=assessment.source.open_meteo,
                weather_api=assessment.source.weather_api,
            ),
            timestamp=assessment.timestamp,
        )
