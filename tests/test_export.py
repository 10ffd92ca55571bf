from datetime import datetime, timezone
from bizplan.export import export_filename, format_plan_for_export, format_plan_for_modification
from bizplan.schemas import GeneratedPlan, PlanSection

PLAN = GeneratedPlan(
    title="SunPower Tech  Business Plan",
    industry="Renewable Energy",
    created_at=datetime(2025, 7, 27, 8, 30, tzinfo=timezone.utc),
    sections=[
        PlanSection(title="Executive Summary", content="We build solar kits."),
        PlanSection(title="Appendices", content="• Chart A"),
    ],
    status="complete",
)


def test_export_text():
    text = format_plan_for_export(PLAN)
    assert text.startswith("SunPower Tech  Business Plan\nIndustry: Renewable Energy\nCreated: 2025-07-27\n\n" + "=" * 50)
    assert "Executive Summary\n" + "-" * 17 + "\n\nWe build solar kits.\n\n" in text
    assert text.endswith("Appendices\n" + "-" * 10 + "\n\n• Chart A\n\n")


def test_modification_text():
    assert format_plan_for_modification(PLAN) == (
        "SunPower Tech  Business Plan\nIndustry: Renewable Energy\n\n"
        "Executive Summary\nWe build solar kits.\n\n"
        "Appendices\n• Chart A\n\n"
    )


def test_filename():
    assert export_filename(PLAN) == "SunPower_Tech_Business_Plan.txt"
    assert export_filename(PLAN, "doc") == "SunPower_Tech_Business_Plan.doc"
