import os
from abc import ABC, abstractmethod
from collections.abc import Mapping

from sentix.config import Settings


class CredentialSource(ABC):
    name: str

    @abstractmethod
    def read(self) -> str | None: ...


class EnvVarSource(CredentialSource):
    def __init__(self, variable: str, environ: Mapping[str, str] | None = None) -> None:
        self.name = variable
        self._environ = environ

    def read(self) -> str | None:
        environ = os.environ if self._environ is None else self._environ
        return environ.get(self.name)


class StaticSource(CredentialSource):
    def __init__(self, name: str, value: str | None) -> None:
        self.name = name
        self._value = value

    def read(self) -> str | None:
        return self._value


def default_sources(
    settings: Settings, environ: Mapping[str, str] | None = None
) -> list[CredentialSource]:
    """Settings value first (SENTIX_API_KEY or .env), then the conventional variables."""
    sources: list[CredentialSource] = [StaticSource("SENTIX_API_KEY", settings.api_key)]
    sources.extend(EnvVarSource(name, environ) for name in settings.credential_env_vars)
    return sources
