import asyncio
import logging
from typing import Any, List, Optional
from dataclasses import dataclass

from google import genai
from google.genai import errors, types
from google.api_core import exceptions as gapi_exceptions
from google.auth import exceptions as auth_exceptions

from app.config import settings, cloud_config
from app.errors import TransportError

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


@dataclass
class LLMConfig:
    """Configuration for LLM calls"""
    model: str = settings.gemini_model
    temperature: float = settings.llm_temperature
    top_p: float = settings.llm_top_p
    max_output_tokens: int = settings.llm_max_output_tokens
    timeout_seconds: float = settings.llm_timeout_seconds
    safety_settings_off: bool = True


@dataclass
class LLMResponse:
    """Raw text answer from the model"""
    content: str
    model: str
    raw_response: Any = None


class GeminiLLMService:
    """
    Thin async wrapper over the Gemini API.

    One request per call, no retries and no streaming. Every failure to get an
    answer is raised as TransportError; deciding what to do about it is up to
    the caller.
    """

    def __init__(self, client: Optional[genai.Client] = None):
        self._client = client

    def _resolve_api_key(self) -> str:
        if settings.google_api_key:
            return settings.google_api_key

        if cloud_config.IS_CLOUD_RUN and cloud_config.PROJECT_ID:
            from app.dependencies import _access_secret_from_sm
            secret_path = cloud_config.get_gemini_api_key_secret_path()
            logger.info(f"Loading Gemini API key from Secret Manager: {secret_path}")
            return _access_secret_from_sm(secret_path).strip()

        return ""

    def _get_client(self, timeout_seconds: float) -> genai.Client:
        if self._client is not None:
            return self._client

        http_options = types.HttpOptions(timeout=int(timeout_seconds * 1000))
        try:
            if settings.use_vertex_ai:
                project_id = settings.project_id or cloud_config.PROJECT_ID
                if not project_id:
                    raise TransportError("Vertex AI selected but no Google Cloud project is configured")
                self._client = genai.Client(
                    vertexai=True,
                    project=project_id,
                    location=settings.region,
                    http_options=http_options
                )
                logger.info(f"Initialized Vertex AI client for project: {project_id}")
            else:
                api_key = self._resolve_api_key()
                if not api_key:
                    raise TransportError("GOOGLE_API_KEY is not configured")
                self._client = genai.Client(api_key=api_key, http_options=http_options)
                logger.info("Initialized Gemini API client")
        except (gapi_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as e:
            raise TransportError(f"Unable to load Gemini credentials: {e}") from e

        return self._client

    def _create_safety_settings(self, safety_off: bool = True) -> List[types.SafetySetting]:
        """Create safety settings configuration"""
        if not safety_off:
            return []  # Use default safety settings

        return [
            types.SafetySetting(category=category, threshold="OFF")
            for category in (
                "HARM_CATEGORY_HATE_SPEECH",
                "HARM_CATEGORY_DANGEROUS_CONTENT",
                "HARM_CATEGORY_SEXUALLY_EXPLICIT",
                "HARM_CATEGORY_HARASSMENT",
            )
        ]

    def _create_contents(self, prompt: str) -> List[types.Content]:
        return [
            types.Content(
                role="user",
                parts=[types.Part(text=prompt)]
            )
        ]

    async def generate_content(self, prompt: str, config: Optional[LLMConfig] = None) -> LLMResponse:
        """
        Send one prompt to the model and return its raw text.

        Args:
            prompt: Fully compiled prompt text
            config: LLM configuration (optional, uses settings defaults if not provided)

        Returns:
            LLMResponse with the model text (may be empty if the model returned no text)

        Raises:
            TransportError: network failure, timeout, or the API rejected the request
        """
        if config is None:
            config = LLMConfig()

        client = self._get_client(config.timeout_seconds)

        generate_content_config = types.GenerateContentConfig(
            temperature=config.temperature,
            top_p=config.top_p,
            max_output_tokens=config.max_output_tokens,
            safety_settings=self._create_safety_settings(config.safety_settings_off)
        )

        logger.info(f"Making LLM call with model: {config.model}, prompt length: {len(prompt)}")
        try:
            response = await asyncio.wait_for(
                client.aio.models.generate_content(
                    model=config.model,
                    contents=self._create_contents(prompt),
                    config=generate_content_config
                ),
                timeout=config.timeout_seconds
            )
        except asyncio.TimeoutError as e:
            logger.error(f"LLM call timed out after {config.timeout_seconds}s")
            raise TransportError(f"Model call timed out after {config.timeout_seconds}s") from e
        except errors.APIError as e:
            logger.error(f"LLM call rejected: {e.code} {e.status}")
            raise TransportError(f"Model API error {e.code}: {e.message}") from e
        except Exception as e:
            logger.error(f"LLM call failed: {e}")
            raise TransportError(f"Model call failed: {e}") from e

        content = response.text or ""
        logger.info(f"LLM call successful, response length: {len(content)}")
        return LLMResponse(content=content, model=config.model, raw_response=response)


# Singleton instance
_llm_service_instance = None

def get_llm_service() -> GeminiLLMService:
    """Get singleton instance of LLM service"""
    global _llm_service_instance
    if _llm_service_instance is None:
        _llm_service_instance = GeminiLLMService()
    return _llm_service_instance
