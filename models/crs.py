"""Schemas for the CRS score API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class CRSFormData(BaseModel):
    """
    CRS calculator form, as sent by the portal UI (camelCase).

    Every field is optional at the schema level; the score routes decide
    which ones are required. Unknown keys are ignored.
    """

    age: float | None = Field(None, description="Age in years")
    education: str | None = Field(
        None, description="secondary, certificate, diploma, bachelor, master or phd"
    )
    workExperience: float | None = Field(None, description="Years of work experience")
    englishListening: float | None = None
    englishReading: float | None = None
    englishWriting: float | None = None
    englishSpeaking: float | None = None
    hasSpouse: bool | None = None
    spouseEducation: str | None = None
    spouseWorkExperience: float | None = None
    spouseEnglishListening: float | None = None
    spouseEnglishReading: float | None = None
    spouseEnglishWriting: float | None = None
    spouseEnglishSpeaking: float | None = None
    jobOffer: bool | None = None
    provincialNomination: bool | None = None
    siblingInCanada: bool | None = None


class ScoreBreakdownOut(BaseModel):
    coreFactors: int = Field(..., description="Age, education, language and work experience points")
    spouseFactors: int = Field(0, description="Spouse education, language and work experience points")
    additionalPoints: int = Field(0, description="Job offer, provincial nomination and sibling points")
    total: int = Field(..., ge=0, le=1200, description="Total CRS score (max 1200)")


class CRSScoreResponse(BaseModel):
    """Response for POST/PUT /crs."""

    score: int = Field(..., ge=0, le=1200)
    breakdown: ScoreBreakdownOut
    factors: dict[str, int] = Field(default_factory=dict, description="Per-factor point breakdown")
    message: str | None = None


class CRSPreviewResponse(BaseModel):
    """Response for POST /crs/preview."""

    score: int = Field(..., ge=0, le=1200)
    breakdown: ScoreBreakdownOut
    factors: dict[str, int] = Field(default_factory=dict)
    missingRequired: list[str] = Field(
        default_factory=list,
        description="Fields the save endpoints would reject the form for",
    )


class CRSCurrentResponse(BaseModel):
    """Response for GET /crs."""

    score: int = 0
    breakdown: ScoreBreakdownOut | None = None
    formData: dict[str, Any] | None = None
    lastUpdated: datetime | None = None


def crs_score_entity(immigration_file: dict) -> dict:
    """Convert the CRS part of an immigration file document to API response format"""
    return {
        "score": immigration_file.get("crs_score") or 0,
        "breakdown": immigration_file.get("crs_breakdown"),
        "formData": immigration_file.get("crs_form_data"),
        "lastUpdated": immigration_file.get("updated_at"),
    }
