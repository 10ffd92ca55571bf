import re
from .schemas import GeneratedPlan


def format_plan_for_export(plan: GeneratedPlan) -> str:
    content = f"{plan.title}\n"
    content += f"Industry: {plan.industry}\n"
    content += f"Created: {plan.created_at.date().isoformat()}\n\n"
    content += "=" * 50 + "\n\n"
    for section in plan.sections:
        content += f"{section.title}\n"
        content += "-" * len(section.title) + "\n\n"
        content += f"{section.content}\n\n"
    return content


def format_plan_for_modification(plan: GeneratedPlan) -> str:
    """Plain-text rendering of a plan that gets embedded in a modification prompt."""
    content = f"{plan.title}\n"
    content += f"Industry: {plan.industry}\n\n"
    for section in plan.sections:
        content += f"{section.title}\n"
        content += f"{section.content}\n\n"
    return content


def export_filename(plan: GeneratedPlan, ext: str = "txt") -> str:
    name = re.sub(r"\s+", "_", plan.title)
    return f"{name}.{ext}"
