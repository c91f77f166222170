"""Content safety checks for hosted-model outputs"""
import re
from typing import Any, Dict, List, Optional

from langchain_google_genai import HarmBlockThreshold, HarmCategory


class ContentSafetyError(Exception):
    """Raised when content fails safety checks"""
    def __init__(self, message: str, safety_ratings: Optional[List[Dict[str, Any]]] = None):
        self.message = message
        self.safety_ratings = safety_ratings or []
        super().__init__(self.message)


def configure_safety_settings():
    """
    Gemini safety settings

    BLOCK_ONLY_HIGH avoids false positives on ordinary travel requests.

    Returns:
        Safety settings dictionary for Gemini
    """
    return {
        HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_ONLY_HIGH,
        HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_ONLY_HIGH,
        HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_ONLY_HIGH,
        HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_ONLY_HIGH,
    }


def check_content_safety(response: Any) -> bool:
    """
    Check a LangChain chat response against the model's safety ratings

    Args:
        response: AIMessage returned by ``ChatGoogleGenerativeAI.ainvoke``

    Returns:
        bool: True if safe

    Raises:
        ContentSafetyError: If content is flagged MEDIUM/HIGH or was blocked
    """
    metadata = getattr(response, 'response_metadata', None) or {}

    for rating in metadata.get('safety_ratings') or []:
        probability = str(rating.get('probability', 'UNKNOWN')).upper()
        if probability in ('MEDIUM', 'HIGH'):
            raise ContentSafetyError(
                f"Content flagged for {rating.get('category', 'UNKNOWN')} with probability {probability}",
                safety_ratings=metadata['safety_ratings']
            )

    finish_reason = str(metadata.get('finish_reason', '')).upper()
    if finish_reason in ('SAFETY', 'BLOCKLIST', 'PROHIBITED_CONTENT'):
        raise ContentSafetyError(f"Content blocked: {finish_reason}")

    return True


# Whole words only: "drugstore" or "shackles" are fine in travel content
_SUSPICIOUS_OUTPUT = re.compile(
    r"\b(hack|exploit|illegal|weapons?|drugs?|violence|suicide|self-harm)\b"
)


def validate_agent_output(output: str) -> bool:
    """
    Keyword screen for text produced by the hosted model

    Args:
        output: Model output text

    Returns:
        bool: True if valid

    Raises:
        ContentSafetyError: If output contains inappropriate content
    """
    match = _SUSPICIOUS_OUTPUT.search((output or "").lower())
    if match:
        raise ContentSafetyError(
            f"Output contains potentially unsafe content related to: {match.group(1)}"
        )
    return True
