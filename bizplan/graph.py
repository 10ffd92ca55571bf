from langgraph.graph import StateGraph, END
from .state import PlanState
from .schemas import BusinessPlanInput, GeneratedPlan
from .nodes import prompt_building, completion, sectionizing, assembly, persistence

graph = StateGraph(state_schema=PlanState)

graph.add_node("prompt_building", prompt_building)
graph.add_node("completion", completion)
graph.add_node("sectionizing", sectionizing)
graph.add_node("assembly", assembly)
graph.add_node("persistence", persistence)

graph.set_entry_point("prompt_building")
graph.add_edge("prompt_building", "completion")
graph.add_edge("completion", "sectionizing")
graph.add_edge("sectionizing", "assembly")
graph.add_edge("assembly", "persistence")
graph.add_edge("persistence", END)

app = graph.compile()


def _config(completion_service=None, store=None, sectionizer=None) -> dict:
    configurable = {}
    if completion_service is not None:
        configurable["completion_service"] = completion_service
    if store is not None:
        configurable["store"] = store
    if sectionizer is not None:
        configurable["sectionizer"] = sectionizer
    return {"configurable": configurable}


def generate(plan_input: BusinessPlanInput, user_id: str = "user1", **deps) -> GeneratedPlan:
    """Ask for a new plan, sectionize it and store it."""
    result = app.invoke({"plan_input": plan_input, "user_id": user_id}, config=_config(**deps))
    return result["plan"]


def modify(plan: GeneratedPlan, request: str, **deps) -> GeneratedPlan:
    """Ask for a changed version of `plan`. Returns a new plan; `plan` is left untouched."""
    result = app.invoke(
        {"base_plan": plan, "modification": request, "user_id": plan.user_id},
        config=_config(**deps),
    )
    return result["plan"]
