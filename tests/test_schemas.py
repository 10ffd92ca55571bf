import pytest
from pydantic import ValidationError
from bizplan.schemas import BusinessPlanInput, GeneratedPlan, PlanSection, ModificationRequest


def make_input(**overrides):
    data = dict(
        business_name="SunPower Tech",
        industry="Renewable Energy",
        business_type="Startup",
        location="Tanzania",
        target_audience="Investors",
        unique_value="Affordable solar-powered smart systems for rural homes",
        revenue_model="Product sales and maintenance contracts",
        goals="Expand to East African markets in 3 years",
    )
    data.update(overrides)
    return data


def test_input_validation():
    plan_input = BusinessPlanInput(**make_input(business_name="  SunPower Tech "))
    assert plan_input.business_name == "SunPower Tech"


def test_input_requires_fields():
    with pytest.raises(ValidationError):
        BusinessPlanInput(**make_input(industry="   "))


def test_optional_input_fields_default_empty():
    data = make_input()
    del data["goals"]
    assert BusinessPlanInput(**data).goals == ""


def test_plan_defaults():
    plan = GeneratedPlan(title="T", industry="I", sections=[PlanSection(title="Intro", content="Content")])
    assert plan.status == "draft"
    assert plan.id
    assert plan.created_at.tzinfo is not None
    assert plan.parent_id is None


def test_plan_needs_a_section():
    with pytest.raises(ValidationError):
        GeneratedPlan(title="T", industry="I", sections=[])


def test_plan_status_values():
    with pytest.raises(ValidationError):
        GeneratedPlan(title="T", industry="I", sections=[PlanSection(title="a", content="b")], status="archived")


def test_modification_request_not_empty():
    with pytest.raises(ValidationError):
        ModificationRequest(request="")


def test_section_is_immutable():
    section = PlanSection(title="Executive Summary", content="One.")
    with pytest.raises(ValidationError):
        section.title = "Other"
    assert hash(section) == hash(PlanSection(title="Executive Summary", content="One."))
