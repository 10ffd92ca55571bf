from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Literal, Optional
import uuid


def new_plan_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PlanSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    content: str


class BusinessPlanInput(BaseModel):
    """What the user tells us about the business."""
    business_name: str = Field(..., min_length=1)
    industry: str = Field(..., min_length=1)
    business_type: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    target_audience: str = Field(..., min_length=1)
    unique_value: str = Field(..., min_length=1, description="Unique value proposition")
    revenue_model: str = ""
    goals: str = ""

    @field_validator("business_name", "industry", "business_type", "location", "target_audience", "unique_value")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class GeneratedPlan(BaseModel):
    """A sectionized business plan. Modifying a plan creates a new one."""
    id: str = Field(default_factory=new_plan_id)
    title: str
    industry: str
    created_at: datetime = Field(default_factory=utcnow)
    sections: List[PlanSection] = Field(..., min_length=1)
    status: Literal["draft", "complete"] = "draft"
    user_id: str = "user1"
    model: Optional[str] = None
    generation_time_ms: int = Field(0, ge=0)
    parent_id: Optional[str] = None
    export_count: int = Field(0, ge=0)


class GenerateRequest(BaseModel):
    user_id: str = "user1"
    input: BusinessPlanInput


class ModificationRequest(BaseModel):
    request: str = Field(..., min_length=1, description="What to change, e.g. 'expand the risk section'")


class SectionUpdate(BaseModel):
    content: str


class SectionizeRequest(BaseModel):
    text: str = ""
