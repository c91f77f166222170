"""Prompt injection detection for text forwarded to the hosted model"""
from typing import List, Tuple


class PromptInjectionDetector:
    """Detect prompt injection attempts in assistant input"""

    # Patterns that indicate prompt injection attempts
    INJECTION_PATTERNS = [
        # Direct instruction override
        'ignore previous instructions',
        'ignore all previous',
        'ignore the above',
        'disregard previous',
        'disregard the above',
        'forget your instructions',
        'forget everything',
        'new instructions',
        'reveal your prompt',
        'system prompt',

        # Role manipulation
        'system:',
        'assistant:',
        'human:',

        # Special tokens (ChatML, etc.)
        '<|im_start|>',
        '<|im_end|>',
        '<|endoftext|>',
        '[INST]',
        '[/INST]',

        # Markdown/formatting exploits
        '```system',
        '```instruction',

        # Direct role assertions
        'you are now',
        'pretend to be',
        'roleplay as',
    ]

    # Code-ish patterns that have no business in a place name
    LOCATION_INJECTION_PATTERNS = [
        '<script',
        'javascript:',
        'eval(',
        'exec(',
        'system(',
        'import ',
        '--',
        '/*',
        '*/',
        '<!--',
        '-->',
        '<?',
        '?>',
    ]

    @classmethod
    def detect_injection(cls, text: str, check_location: bool = False) -> Tuple[bool, List[str]]:
        """
        Detect potential prompt injection in text

        Args:
            text: Text to check
            check_location: If True, also check for code injection patterns

        Returns:
            Tuple of (is_safe, detected_patterns)
            is_safe: False if injection detected
            detected_patterns: List of detected pattern keywords
        """
        if not text:
            return True, []

        text_lower = text.lower()
        detected = [p for p in cls.INJECTION_PATTERNS if p.lower() in text_lower]

        if check_location:
            detected.extend(p for p in cls.LOCATION_INJECTION_PATTERNS if p in text_lower)

        return len(detected) == 0, detected

    @classmethod
    def sanitize_text(cls, text: str, max_length: int = 1000) -> str:
        """
        Trim, drop control characters and collapse whitespace

        Args:
            text: Text to sanitize
            max_length: Maximum allowed length

        Returns:
            Sanitized text
        """
        if not text:
            return ""

        text = text[:max_length]
        text = ''.join(c for c in text if c.isprintable() or c.isspace())
        text = ' '.join(text.split())

        return text.strip()
