"""
Pydantic schemas for the Lead Scoring Service
"""

from enum import Enum
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================

class Intent(str, Enum):
    """Coarse buying intent of a lead"""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


# =============================================================================
# INPUT SCHEMAS
# =============================================================================

class Offer(BaseModel):
    """Product/offer profile the leads are scored against"""
    name: str = Field(..., min_length=1, description="Offer name")
    value_props: List[str] = Field(default_factory=list)
    ideal_use_cases: List[str] = Field(default_factory=list)

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "name": "AI Outreach Automation",
                "value_props": ["24/7 outreach", "6x more meetings"],
                "ideal_use_cases": ["B2B SaaS mid-market"],
            }
        },
    }


class Lead(BaseModel):
    """A prospect record as ingested from CSV"""
    name: str = ""
    role: str = ""
    company: str = ""
    industry: str = ""
    location: str = ""
    linkedin_bio: str = ""

    model_config = {"frozen": True}

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        if value is None:
            return ""
        return str(value)


# =============================================================================
# STAGE RESULT SCHEMAS
# =============================================================================

class RuleScoreBreakdown(BaseModel):
    """Result from the rule scoring stage"""
    role: int = 0
    industry: int = 0
    completeness: int = 0

    @property
    def total(self) -> int:
        return self.role + self.industry + self.completeness


class IntentResult(BaseModel):
    """Result from the intent classification stage"""
    intent: Intent = Intent.MEDIUM
    reason: str
    fallback: bool = False


# =============================================================================
# OUTPUT SCHEMAS
# =============================================================================

class ScoredLead(BaseModel):
    """Final scored record for one lead"""
    name: str
    role: str
    company: str
    intent: Intent
    score: int = Field(..., ge=0, le=100)
    reason: str
    raw_rule_score: int = Field(..., ge=0, le=50)
    raw_ai_points: Literal[10, 30, 50]


class ScoreRunSummary(BaseModel):
    """Response returned after a scoring run"""
    status: str = "ok"
    scored: int
    high_intent: int
    fallbacks: int
    processing_time_ms: float
    offer_name: Optional[str] = None
