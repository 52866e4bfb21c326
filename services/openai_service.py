"""
OpenAI API service for feedback classification.
Sends raw feedback to a chat-completions model and validates the JSON themes it returns.
"""
import json
import logging
from typing import Any, Optional
import openai
from pydantic import ValidationError

from config import Config
from app.errors import ClassificationError
from app.interfaces.feedback_classifier import IFeedbackClassifier
from app.schemas.report import ClassificationResult

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You are an expert product analyst. Your job is to analyze raw user feedback and categorize it. Analyze the following text and return a structured JSON object. Your response MUST be a valid JSON object.
First, group all feedback into distinct themes.
For each distinct theme, you must provide:
1. 'category': A clear category (e.g., 'Bug Report', 'Feature Request', 'UI/UX Complaint', 'Positive Feedback').
2. 'sentiment': ('Positive', 'Negative', 'Neutral').
3. 'summary': A concise, one-sentence summary of the theme.
4. 'quote': The single best, most representative user quote for this theme, copied verbatim from the text.
5. 'count': An integer representing the number of times this specific theme was mentioned.
6. 'priority': A priority level ('High', 'Medium', or 'Low'). A 'High' priority should be assigned to critical issues like data loss, crashes, security flaws, or features blocking a user's core workflow.
Return the themes as a top-level array named 'themes'.
Finally, provide a top-level 'overall_summary' of the key insights.

Example shape:
{"themes": [{"category": "Bug Report", "sentiment": "Negative", "summary": "...", "quote": "...", "count": 2, "priority": "High"}], "overall_summary": "..."}"""


class OpenAIService(IFeedbackClassifier):
    """Service for OpenAI API interactions."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[Any] = None,
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: API key (defaults to Config.OPENAI_API_KEY)
            model: Model id (defaults to Config.OPENAI_MODEL)
            timeout: Transport timeout in seconds (defaults to Config.OPENAI_TIMEOUT_SECONDS)
            client: Pre-built client, mainly for tests
        """
        self.api_key = api_key if api_key is not None else Config.OPENAI_API_KEY
        self.model = model or Config.OPENAI_MODEL
        self.timeout = timeout if timeout is not None else Config.OPENAI_TIMEOUT_SECONDS

        self.client = client
        if self.client is None and self.api_key:
            # Failures are terminal for the request; the SDK must not retry on its own.
            self.client = openai.OpenAI(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=0
            )

        if self.client is None:
            logger.warning("OpenAIService initialized without an API key; classification will fail")
        else:
            logger.info(f"OpenAIService initialized with model: {self.model}")

    @property
    def model_name(self) -> str:
        return self.model

    def classify(self, text: str) -> ClassificationResult:
        """
        Categorize feedback text into themes.

        Args:
            text: Raw submitted feedback

        Returns:
            Validated ClassificationResult

        Raises:
            ClassificationError: On any upstream or parsing failure
        """
        if self.client is None:
            raise ClassificationError("OpenAI API key is not configured.")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": text}
                ],
                response_format={"type": "json_object"}
            )
        except openai.APIStatusError as e:
            logger.error(f"OpenAI API Error ({e.status_code}): {self._error_body(e)}")
            raise ClassificationError(
                f"AI analysis failed with status: {e.status_code}",
                status=e.status_code
            ) from e
        except openai.APIConnectionError as e:
            logger.error(f"OpenAI API connection error: {e}")
            raise ClassificationError("Could not reach the AI analysis service.") from e
        except openai.OpenAIError as e:
            logger.error(f"OpenAI client error: {e}", exc_info=True)
            raise ClassificationError() from e

        content = self._extract_content(response)

        try:
            data = json.loads(content)
        except (TypeError, ValueError) as e:
            logger.error(f"OpenAI returned a body that is not valid JSON: {str(content)[:500]!r}")
            raise ClassificationError("AI analysis returned an unreadable result.") from e

        try:
            result = ClassificationResult.model_validate(data)
        except ValidationError as e:
            logger.error(f"OpenAI result did not match the expected schema: {e}")
            raise ClassificationError("AI analysis returned an unexpected format.") from e

        logger.info(f"Classified feedback into {len(result.themes)} theme(s) using {self.model}")
        return result

    def _extract_content(self, response: Any) -> str:
        """Pull the first choice's message content or fail."""
        choices = getattr(response, 'choices', None) or []
        message = getattr(choices[0], 'message', None) if choices else None
        content = getattr(message, 'content', None) if message is not None else None

        if not content:
            logger.error(f"Unexpected OpenAI API response structure: {response!r}")
            raise ClassificationError()

        return content

    @staticmethod
    def _error_body(error: 'openai.APIStatusError') -> str:
        body = getattr(error, 'body', None)
        if body is not None:
            return json.dumps(body, default=str)[:1000]
        return str(error)
