from enum import StrEnum

from pydantic import BaseModel, ConfigDict, computed_field
from pydantic.alias_generators import to_camel

from sentix.sentiment.schemas import MarketAnalysis, StockSentiment


class StoreStatus(StrEnum):
    idle = "idle"
    loading = "loading"
    ready = "ready"
    failed = "failed"


class View(StrEnum):
    dashboard = "dashboard"
    leaderboard = "leaderboard"


class ChartRange(StrEnum):
    days_30 = "30D"
    days_60 = "60D"
    days_90 = "90D"

    @property
    def days(self) -> int:
        return int(self.value[:-1])


class StoreError(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    code: str
    message: str
    credential_required: bool = False
    status_code: int | None = None


class DashboardState(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    status: StoreStatus
    view: View
    chart_range: ChartRange
    analysis: MarketAnalysis | None = None
    selected_symbol: str | None = None
    error: StoreError | None = None
    last_updated: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def loading(self) -> bool:
        return self.status is StoreStatus.loading

    @computed_field(alias="selectedStock")  # type: ignore[prop-decorator]
    @property
    def selected_stock(self) -> StockSentiment | None:
        if self.analysis is None or self.selected_symbol is None:
            return None
        return self.analysis.find(self.selected_symbol)


class RefreshRequest(BaseModel):
    api_key: str | None = None
