from typing import List, Optional, TypedDict
from .schemas import BusinessPlanInput, GeneratedPlan, PlanSection


class PlanState(TypedDict, total=False):
    user_id: str
    plan_input: Optional[BusinessPlanInput]  # set when generating
    base_plan: Optional[GeneratedPlan]  # set when modifying
    modification: str
    prompt: str
    context: List[str]  # earlier turns sent before the prompt
    completion: str  # raw model text
    generation_time_ms: int
    sections: List[PlanSection]
    plan: GeneratedPlan
