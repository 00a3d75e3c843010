import re
from collections.abc import Sequence

import structlog

from sentix.credentials.sources import CredentialSource
from sentix.exceptions import InvalidCredentialFormatError, MissingCredentialError

logger = structlog.get_logger()

KEY_MARKER = "AIza"
_KEY_PATTERN = re.compile(r"AIza[0-9A-Za-z_\-]{35}")
_INVALID_KEY_CHAR = re.compile(r"[^A-Za-z0-9_\-]")
_MIN_FALLBACK_LENGTH = 20
_MASK_LENGTH = 5
_QUOTES = "'\""


def mask_secret(value: str) -> str:
    """Return at most the first five characters of a secret, safe for logs."""
    return value[:_MASK_LENGTH]


def sanitize_credential(raw: str) -> str:
    """Normalize a raw key value pulled from config.

    Handles surrounding whitespace and quotes, and values wrapped in extra text
    such as ``GEMINI_API_KEY: AIza...`` or ``key='AIza...'``.
    """
    value = str(raw).strip().strip(_QUOTES).strip()

    match = _KEY_PATTERN.search(value)
    if match:
        return match.group(0)

    start = value.find(KEY_MARKER)
    if start != -1:
        candidate = value[start:]
        end = _INVALID_KEY_CHAR.search(candidate)
        if end:
            candidate = candidate[: end.start()]
        if len(candidate) > _MIN_FALLBACK_LENGTH:
            return candidate

    return value


class CredentialResolver:
    def __init__(self, sources: Sequence[CredentialSource]) -> None:
        self._sources = list(sources)

    def resolve(self, explicit_override: str | None = None) -> str:
        raw, origin = self._find_raw(explicit_override)
        if raw is None:
            logger.error("credential_missing", sources=[s.name for s in self._sources])
            raise MissingCredentialError()

        key = sanitize_credential(raw)
        if not key.startswith(KEY_MARKER):
            masked = mask_secret(key)
            logger.error("credential_invalid_format", source=origin, prefix=masked)
            raise InvalidCredentialFormatError(masked)

        logger.debug("credential_resolved", source=origin, prefix=mask_secret(key))
        return key

    def _find_raw(self, explicit_override: str | None) -> tuple[str | None, str | None]:
        if explicit_override and explicit_override.strip():
            return explicit_override, "override"

        for source in self._sources:
            value = source.read()
            if value and value.strip():
                return value, source.name
        return None, None
