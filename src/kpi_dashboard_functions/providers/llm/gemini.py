import logging
from typing import Any

from kpi_dashboard_functions.config import Settings

logger = logging.getLogger(__name__)
ERROR_LOG_LIMIT = 1000

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)


class GeminiProvider:
    """Text generation against Gemini through langchain-google-genai.

    The chat model is built on first use so that a missing key surfaces as a
    generation failure instead of breaking application start-up.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.model = settings.gemini_model
        self._llm: Any | None = None

    async def generate_content(self, prompt: str) -> str:
        llm = self._get_llm()
        logger.info("llm.call model=%s prompt_chars=%d", self.model, len(prompt))
        try:
            response = await llm.ainvoke(prompt)
        except Exception as exc:
            logger.error(
                "llm.error model=%s type=%s detail=%s",
                self.model,
                exc.__class__.__name__,
                self._extract_error_detail(exc),
            )
            raise
        text = self._message_text(getattr(response, "content", response))
        logger.info("llm.response model=%s chars=%d", self.model, len(text))
        return text

    def _get_llm(self):
        if self._llm is None:
            from langchain_google_genai import ChatGoogleGenerativeAI

            self._llm = ChatGoogleGenerativeAI(
                model=self.model,
                google_api_key=self.settings.gemini_api_key or None,
                temperature=self.settings.gemini_temperature,
                top_p=self.settings.gemini_top_p,
                top_k=self.settings.gemini_top_k,
                max_output_tokens=self.settings.gemini_max_output_tokens,
                timeout=self.settings.llm_timeout_seconds,
                max_retries=self.settings.llm_num_retries,
                safety_settings=self._safety_settings(),
            )
        return self._llm

    @staticmethod
    def _safety_settings() -> dict:
        from langchain_google_genai import HarmBlockThreshold, HarmCategory

        return {
            getattr(HarmCategory, name): HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE for name in SAFETY_CATEGORIES
        }

    @staticmethod
    def _message_text(content: Any) -> str:
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            parts: list[str] = []
            for item in content:
                if isinstance(item, dict):
                    parts.append(str(item.get("text", item)))
                else:
                    parts.append(str(item))
            return "".join(parts)
        return str(content)

    @staticmethod
    def _clip(text: str, limit: int) -> str:
        normalized = " ".join(text.split()).strip()
        if len(normalized) <= limit:
            return normalized
        return f"{normalized[:limit]}...(truncated)"

    def _extract_error_detail(self, exc: Exception) -> str:
        status_code = getattr(exc, "status_code", None) or getattr(exc, "code", None)
        message = getattr(exc, "message", None) or str(exc)
        details = [f"status_code={status_code}" if status_code is not None else ""]
        details.append(f"message={message}")
        return self._clip(" ".join([part for part in details if part]).strip(), ERROR_LOG_LIMIT)
