import pytest
from bizplan.completion import EMPTY_COMPLETION, CompletionService
from bizplan.config import Settings
from bizplan.schemas import BusinessPlanInput
from bizplan.store import PlanStore

PLAN_TEXT = """**1. Executive Summary**
SunPower Tech brings solar kits to rural homes.

**2. Market Analysis**
- Rural demand is high
- Grid coverage is low

**3. Risk Analysis**
Currency risk and supply delays.
"""


class FakeCompletionService(CompletionService):
    """Returns canned answers and records every prompt it was sent."""

    def __init__(self, responses=None, error=None):
        super().__init__(llm=object(), config=Settings(llm_provider="google", google_api_key="test-key", llm_model="fake-model"))
        self.responses = list(responses or [PLAN_TEXT])
        self.error = error
        self.prompts = []
        self.empty_texts = []

    def complete(self, prompt, context=(), empty_text=EMPTY_COMPLETION):
        self.prompts.append(prompt)
        self.empty_texts.append(empty_text)
        if self.error is not None:
            raise self.error
        return self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]


@pytest.fixture
def plan_input():
    return BusinessPlanInput(
        business_name="SunPower Tech",
        industry="Renewable Energy",
        business_type="Startup",
        location="Tanzania",
        target_audience="Investors",
        unique_value="Affordable solar-powered smart systems for rural homes",
        revenue_model="Product sales and maintenance contracts",
        goals="Expand to East African markets in 3 years",
    )


@pytest.fixture
def store(tmp_path):
    s = PlanStore(str(tmp_path / "plans.db"))
    yield s
    s.close()


@pytest.fixture
def fake_service():
    return FakeCompletionService()


@pytest.fixture
def make_service():
    return FakeCompletionService
