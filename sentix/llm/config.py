from enum import StrEnum


class LLMProvider(StrEnum):
    GOOGLE = "google"


GOOGLE_SEARCH_TOOL = {"google_search": {}}
