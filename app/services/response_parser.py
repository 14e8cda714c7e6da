import json
import re
import logging
from typing import Optional

from pydantic import ValidationError

from app.errors import ParseError
from app.models.itinerary import Itinerary

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

FENCE = "```"
OPENING_FENCE = re.compile(r"^```[\w-]*[ \t]*\n?")
CLOSING_FENCE = re.compile(r"\n?```$")


def strip_code_fence(text: str) -> str:
    """
    Remove a markdown code fence wrapped around the whole text.

    ```json
    {...}
    ```

    becomes ``{...}``. The opening fence may carry a language tag and the
    closing fence may sit on the same line as the last line of content. Text
    that is not fully wrapped is returned trimmed but otherwise unchanged.
    """
    stripped = text.strip()
    if len(stripped) < 2 * len(FENCE) or not (stripped.startswith(FENCE) and stripped.endswith(FENCE)):
        return stripped

    body = OPENING_FENCE.sub("", stripped, count=1)
    body = CLOSING_FENCE.sub("", body, count=1)
    return body.strip()


def parse_itinerary_response(text: str, expected_days: Optional[int] = None) -> Itinerary:
    """
    Turn raw model text into an Itinerary.

    Only structure is checked: every required top-level field must be present
    with the right shape. Values are not judged.

    Args:
        text: Raw response text from the model
        expected_days: When given, the number of days the document must contain

    Raises:
        ParseError: the text is not JSON, not an object, or not itinerary-shaped
    """
    cleaned = strip_code_fence(text or "")
    if not cleaned:
        raise ParseError("Model returned an empty response")

    logger.info(f"Cleaned response (first 200 chars): {cleaned[:200]}")

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse LLM response as JSON at position {e.pos}: {e.msg}")
        raise ParseError(f"Model did not return valid JSON: {e.msg} at position {e.pos}") from e

    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object, got {type(data).__name__}")

    try:
        itinerary = Itinerary.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors(include_url=False)
        )
        logger.error(f"LLM response failed structural validation: {problems}")
        raise ParseError(f"Itinerary structure invalid: {problems}") from e

    if expected_days is not None and len(itinerary.days) != expected_days:
        raise ParseError(f"Expected {expected_days} days, model returned {len(itinerary.days)}")

    logger.info(f"Successfully parsed itinerary '{itinerary.title}' with {len(itinerary.days)} days")
    return itinerary
