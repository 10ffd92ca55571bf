from dataclasses import dataclass, field
from typing import Tuple

DEFAULT_SECTIONS = (
    "Executive Summary",
    "Company Description",
    "Market Analysis",
    "Organization & Management",
    "Products or Services",
    "Marketing & Sales Strategy",
    "Financial Projections",
    "Risk Analysis",
    "Implementation Timeline",
    "Appendices",
)

FALLBACK_TITLE = "Business Plan"

SYSTEM_PROMPT_TEMPLATE = """You are an expert business plan consultant with 20+ years of experience helping entrepreneurs and startups create professional, investor-ready business plans. Your expertise includes:

- Market analysis and competitive research
- Financial modeling and projections
- Strategic planning and growth strategies
- Risk assessment and mitigation
- Industry-specific insights and trends
- Investor presentation and funding strategies

Create comprehensive, professional business plans that are:
- Well-structured with clear sections
- Data-driven with realistic projections
- Tailored to the specific industry and market
- Investor-ready with compelling narratives
- Actionable with clear implementation steps

IMPORTANT: Format your response as clean, readable text without any markdown formatting, asterisks, or special characters. Use plain text with proper paragraphs and line breaks. Structure your response with the following sections:
{numbered_sections}

Each section should be detailed, professional, and specific to the business context provided. Write in clear, professional language without any formatting symbols, asterisks, or markdown. Use proper paragraphs with line breaks for readability."""


@dataclass(frozen=True)
class PlanOutline:
    """Ordered section names a generated plan is expected to contain.

    The outline also owns the system prompt, so a custom outline asks the
    model for exactly the sections it will later look for.
    """

    sections: Tuple[str, ...] = DEFAULT_SECTIONS
    fallback_title: str = FALLBACK_TITLE
    prompt_template: str = field(default=SYSTEM_PROMPT_TEMPLATE, repr=False)

    def __post_init__(self):
        if not self.sections:
            raise ValueError("An outline needs at least one section name")
        # Accept any iterable of names but store a tuple
        object.__setattr__(self, "sections", tuple(self.sections))

    @property
    def system_prompt(self) -> str:
        numbered = "\n".join(f"{i}. {name}" for i, name in enumerate(self.sections, start=1))
        return self.prompt_template.format(numbered_sections=numbered)


DEFAULT_OUTLINE = PlanOutline()
