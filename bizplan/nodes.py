import logging
import time

from langchain_core.prompts import PromptTemplate
from langchain_core.runnables import RunnableConfig

from .completion import EMPTY_COMPLETION, EMPTY_MODIFICATION, get_completion_service
from .export import format_plan_for_modification
from .schemas import BusinessPlanInput, GeneratedPlan
from .sectionizer import default_sectionizer
from .state import PlanState
from .store import get_store

logger = logging.getLogger(__name__)

PLAN_PROMPT = PromptTemplate.from_template(
    """Create a comprehensive, professional business plan for the following business:

- Business Name: {business_name}
- Industry: {industry}
- Business Type: {business_type}
- Location: {location}
- Target Audience: {target_audience}
- Unique Value Proposition: {unique_value}
- Revenue Model: {revenue_model}
- Goals: {goals}

Please create a detailed, investor-ready business plan that includes:
- Market research specific to {industry} in {location}
- Competitive analysis and positioning
- Realistic financial projections for 3-5 years
- Marketing strategies tailored to {target_audience}
- Implementation roadmap aligned with the goal: {goals}
- Risk assessment and mitigation strategies
- Industry-specific insights and trends

The plan should be professional, comprehensive, and ready for presentation to investors, lenders, or stakeholders. Include specific data, metrics, and actionable strategies where possible."""
)

MODIFICATION_PROMPT = PromptTemplate.from_template(
    """You are an expert business plan consultant. Please modify the following business plan based on this specific request: "{request}"

Current Business Plan:
{current_plan}

Please provide the complete modified business plan with all sections updated as needed. Maintain the same professional structure and format. Focus specifically on the requested changes while ensuring the entire plan remains coherent and professional.

IMPORTANT: Format your response as clean, readable text without any markdown formatting, asterisks, or special characters. Use plain text with proper paragraphs and line breaks."""
)


def build_plan_prompt(plan_input: BusinessPlanInput) -> str:
    return PLAN_PROMPT.format(**plan_input.model_dump())


def build_modification_prompt(plan: GeneratedPlan, request: str) -> str:
    return MODIFICATION_PROMPT.format(request=request, current_plan=format_plan_for_modification(plan))


def _configurable(config: RunnableConfig | None) -> dict:
    return (config or {}).get("configurable", {})


def prompt_building(state: PlanState) -> PlanState:
    if state.get("base_plan") is not None:
        state["prompt"] = build_modification_prompt(state["base_plan"], state["modification"])
    elif state.get("plan_input") is not None:
        state["prompt"] = build_plan_prompt(state["plan_input"])
    else:
        raise ValueError("Either plan_input or base_plan is required")
    state.setdefault("context", [])
    return state


def completion(state: PlanState, config: RunnableConfig) -> PlanState:
    service = _configurable(config).get("completion_service") or get_completion_service()
    started = time.monotonic()
    # ServiceError propagates; nothing downstream runs and nothing is saved
    empty_text = EMPTY_MODIFICATION if state.get("base_plan") is not None else EMPTY_COMPLETION
    state["completion"] = service.complete(state["prompt"], state.get("context", []), empty_text=empty_text)
    state["generation_time_ms"] = int((time.monotonic() - started) * 1000)
    logger.info(f"Completion took {state['generation_time_ms']} ms")
    return state


def sectionizing(state: PlanState, config: RunnableConfig) -> PlanState:
    sectionizer = _configurable(config).get("sectionizer") or default_sectionizer
    state["sections"] = sectionizer.sectionize(state["completion"])
    return state


def assembly(state: PlanState, config: RunnableConfig) -> PlanState:
    service = _configurable(config).get("completion_service") or get_completion_service()
    base = state.get("base_plan")
    if base is not None:
        # a modification is a new plan; the base stays as it was
        plan = GeneratedPlan(
            title=f"{base.title} (Modified)",
            industry=base.industry,
            user_id=base.user_id,
            sections=state["sections"],
            status="complete",
            model=service.model_name,
            generation_time_ms=state.get("generation_time_ms", 0),
            parent_id=base.id,
        )
    else:
        plan_input = state["plan_input"]
        plan = GeneratedPlan(
            title=f"{plan_input.business_name} Business Plan",
            industry=plan_input.industry,
            user_id=state.get("user_id", "user1"),
            sections=state["sections"],
            status="complete",
            model=service.model_name,
            generation_time_ms=state.get("generation_time_ms", 0),
        )
    state["plan"] = plan
    return state


def persistence(state: PlanState, config: RunnableConfig) -> PlanState:
    store = _configurable(config).get("store") or get_store()
    store.save(state["plan"])
    logger.info(f"Persisted plan {state['plan'].id}")
    return state
