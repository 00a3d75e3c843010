from typing import Annotated

from fastapi import Depends

from sentix.config import settings
from sentix.credentials import CredentialResolver, default_sources
from sentix.dashboard.store import AnalysisStore
from sentix.sentiment.service import SentimentClient

_store: AnalysisStore | None = None


def get_credential_resolver() -> CredentialResolver:
    return CredentialResolver(default_sources(settings))


def get_sentiment_client() -> SentimentClient:
    return SentimentClient()


def get_store() -> AnalysisStore:
    global _store
    if _store is None:
        _store = AnalysisStore(get_credential_resolver(), get_sentiment_client())
    return _store


StoreDep = Annotated[AnalysisStore, Depends(get_store)]
