from sentix.credentials.resolver import CredentialResolver, mask_secret, sanitize_credential
from sentix.credentials.sources import CredentialSource, EnvVarSource, StaticSource, default_sources

__all__ = [
    "CredentialResolver",
    "CredentialSource",
    "EnvVarSource",
    "StaticSource",
    "default_sources",
    "mask_secret",
    "sanitize_credential",
]
