import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Protocol, Union

from pydantic import BaseModel, ValidationError

from kpi_dashboard_functions.providers.auth.firebase import AuthContext

logger = logging.getLogger(__name__)

UNAUTHENTICATED_MESSAGE = "The function must be called while authenticated."
INVALID_ARGUMENT_MESSAGE = "The function must be called with string arguments 'period' and 'view'."
INTERNAL_MESSAGE = "Error generating executive summary."


class TextGenerator(Protocol):
    async def generate_content(self, prompt: str) -> str: ...


class SummaryRequest(BaseModel):
    period: str
    view: str


@dataclass(frozen=True)
class Summary:
    text: str

    def as_result(self) -> dict[str, str]:
        return {"summary": self.text}


@dataclass(frozen=True)
class Unauthenticated:
    kind: ClassVar[str] = "unauthenticated"
    message: ClassVar[str] = UNAUTHENTICATED_MESSAGE


@dataclass(frozen=True)
class InvalidArgument:
    kind: ClassVar[str] = "invalid-argument"
    message: ClassVar[str] = INVALID_ARGUMENT_MESSAGE


@dataclass(frozen=True)
class Internal:
    kind: ClassVar[str] = "internal"
    message: ClassVar[str] = INTERNAL_MESSAGE


SummaryFailure = Union[Unauthenticated, InvalidArgument, Internal]
SummaryOutcome = Union[Summary, SummaryFailure]


def build_executive_summary_prompt(period: str, view: str) -> str:
    return "\n".join(
        [
            f"You are the Chief Operating Officer of a restaurant company reviewing {period} performance.",
            "",
            f"View: {view}",
            f"Period: {period}",
            "",
            "Create a concise executive summary (3-4 paragraphs) covering:",
            "1. Overall Performance Highlights",
            "2. Key Wins and Challenges",
            "3. Critical Action Items",
            "4. Strategic Recommendations",
            "",
            "Be specific with numbers and focus on what matters most.",
        ]
    )


class ExecutiveSummaryService:
    def __init__(self, generator: TextGenerator) -> None:
        self.generator = generator

    async def summarize(self, payload: Any, auth: AuthContext | None) -> SummaryOutcome:
        if auth is None:
            logger.info("summary.rejected reason=unauthenticated")
            return Unauthenticated()

        try:
            request = SummaryRequest.model_validate(payload, strict=True)
        except ValidationError as exc:
            logger.info("summary.rejected reason=invalid_argument uid=%s errors=%d", auth.uid, exc.error_count())
            return InvalidArgument()

        prompt = build_executive_summary_prompt(request.period, request.view)
        try:
            text = await self.generator.generate_content(prompt)
        except Exception:
            logger.exception("summary.failed uid=%s view=%s", auth.uid, request.view)
            return Internal()

        logger.info("summary.generated uid=%s view=%s chars=%d", auth.uid, request.view, len(text))
        return Summary(text=text)
