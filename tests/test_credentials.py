"""Tests for credential discovery and sanitization."""

import pytest

from conftest import VALID_KEY
from sentix.config import Settings
from sentix.credentials import (
    CredentialResolver,
    EnvVarSource,
    StaticSource,
    default_sources,
    mask_secret,
    sanitize_credential,
)
from sentix.exceptions import InvalidCredentialFormatError, MissingCredentialError


def _env_resolver(environ: dict[str, str]) -> CredentialResolver:
    names = ["REACT_APP_API_KEY", "VITE_API_KEY", "NEXT_PUBLIC_API_KEY", "API_KEY"]
    return CredentialResolver([EnvVarSource(name, environ) for name in names])


class TestSanitize:
    def test_exact_key_passes_through(self) -> None:
        assert sanitize_credential("AIza1234567890123456789012345678901234") == (
            "AIza1234567890123456789012345678901234"
        )

    @pytest.mark.parametrize(
        "raw",
        [
            f"  '{VALID_KEY}' trailing junk",
            f'"{VALID_KEY}"',
            f"GEMINI_API_KEY: {VALID_KEY}.",
            f"key='{VALID_KEY}'\n",
            f"{VALID_KEY}EXTRA",
        ],
    )
    def test_extracts_39_character_token(self, raw: str) -> None:
        key = sanitize_credential(raw)
        assert key == VALID_KEY
        assert len(key) == 39

    def test_short_marker_fallback_truncates_at_invalid_char(self) -> None:
        raw = "prefix AIzaShortButLongEnough12345 suffix"
        assert sanitize_credential(raw) == "AIzaShortButLongEnough12345"

    def test_fallback_too_short_keeps_original_value(self) -> None:
        raw = "junk AIzaTiny!"
        assert sanitize_credential(raw) == raw

    def test_mask_secret_never_exceeds_five_chars(self) -> None:
        assert mask_secret(VALID_KEY) == "AIzaA"
        assert mask_secret("sk") == "sk"


class TestResolve:
    def test_valid_scenario_key(self) -> None:
        resolver = CredentialResolver([StaticSource("cfg", "AIza1234567890123456789012345678901234")])
        assert resolver.resolve() == "AIza1234567890123456789012345678901234"

    def test_non_google_key_fails_with_masked_prefix(self) -> None:
        resolver = CredentialResolver([StaticSource("cfg", "sk-abc")])
        with pytest.raises(InvalidCredentialFormatError) as exc_info:
            resolver.resolve()
        assert exc_info.value.masked_prefix == "sk-ab"
        assert "sk-abc" not in exc_info.value.message
        assert exc_info.value.code == "INVALID_KEY_FORMAT"

    def test_long_secret_is_not_leaked(self) -> None:
        secret = "not-a-google-key-but-very-secret-value"
        resolver = CredentialResolver([StaticSource("cfg", secret)])
        with pytest.raises(InvalidCredentialFormatError) as exc_info:
            resolver.resolve()
        assert secret not in str(exc_info.value)

    def test_no_sources_set_is_missing(self) -> None:
        with pytest.raises(MissingCredentialError):
            _env_resolver({}).resolve()

    def test_blank_values_count_as_missing(self) -> None:
        with pytest.raises(MissingCredentialError):
            _env_resolver({"REACT_APP_API_KEY": "   ", "API_KEY": ""}).resolve()

    def test_first_non_empty_source_wins(self) -> None:
        other = "AIza" + "Z" * 35
        environ = {"VITE_API_KEY": VALID_KEY, "API_KEY": other}
        assert _env_resolver(environ).resolve() == VALID_KEY

    def test_override_beats_sources(self) -> None:
        other = "AIza" + "Z" * 35
        resolver = _env_resolver({"REACT_APP_API_KEY": VALID_KEY})
        assert resolver.resolve(f"  {other} ") == other

    def test_blank_override_falls_back_to_sources(self) -> None:
        resolver = _env_resolver({"API_KEY": VALID_KEY})
        assert resolver.resolve("   ") == VALID_KEY

    def test_padded_source_value_is_sanitized(self) -> None:
        resolver = _env_resolver({"API_KEY": f"  '{VALID_KEY}' # from vercel"})
        assert resolver.resolve() == VALID_KEY


class TestDefaultSources:
    def test_settings_key_comes_first(self) -> None:
        settings = Settings(api_key="", credential_env_vars=["GEMINI_API_KEY"])
        sources = default_sources(settings, {"GEMINI_API_KEY": VALID_KEY})
        assert [s.name for s in sources] == ["SENTIX_API_KEY", "GEMINI_API_KEY"]
        assert CredentialResolver(sources).resolve() == VALID_KEY

    def test_settings_key_wins_over_environment(self) -> None:
        other = "AIza" + "Z" * 35
        settings = Settings(api_key=other, credential_env_vars=["GEMINI_API_KEY"])
        sources = default_sources(settings, {"GEMINI_API_KEY": VALID_KEY})
        assert CredentialResolver(sources).resolve() == other
