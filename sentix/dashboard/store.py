"""In-memory dashboard state machine.

idle -> loading -> (ready | failed); ready/failed -> loading on refresh.
The store is the only writer of the current analysis and the view state.
"""

import asyncio
from datetime import UTC, datetime

import structlog

from sentix.credentials import CredentialResolver
from sentix.dashboard.schemas import ChartRange, DashboardState, StoreError, StoreStatus, View
from sentix.exceptions import AppError, MissingCredentialError
from sentix.sentiment.schemas import MarketAnalysis
from sentix.sentiment.service import SentimentClient

logger = structlog.get_logger()

MISSING_KEY_MESSAGE = (
    "The app cannot find an API key. Set SENTIX_API_KEY (or GEMINI_API_KEY) in the "
    "environment or .env file and restart, or enter a key below."
)
INVALID_KEY_MESSAGE = (
    "The configured API key does not look like a Google API key (it should start "
    "with 'AIza'). Check the value or enter a key below."
)
REJECTED_KEY_MESSAGE = "The AI provider rejected the API key. Check the key or enter another below."
GENERIC_FAILURE_MESSAGE = (
    "Failed to generate market analysis. The AI model might be busy or the search "
    "failed. Please try again."
)


def classify_error(exc: Exception) -> StoreError:
    """Turn a resolver/client failure into the error shown to the user."""
    if not isinstance(exc, AppError):
        return StoreError(code="INTERNAL_ERROR", message=GENERIC_FAILURE_MESSAGE)

    status_code = getattr(exc, "status_code", None)
    if isinstance(exc, MissingCredentialError):
        message = MISSING_KEY_MESSAGE
    elif exc.code == "INVALID_KEY_FORMAT":
        message = INVALID_KEY_MESSAGE
    elif exc.credential_required:
        message = REJECTED_KEY_MESSAGE
    else:
        message = GENERIC_FAILURE_MESSAGE

    return StoreError(
        code=exc.code,
        message=message,
        credential_required=exc.credential_required,
        status_code=status_code,
    )


class AnalysisStore:
    def __init__(self, resolver: CredentialResolver, client: SentimentClient) -> None:
        self._resolver = resolver
        self._client = client
        self._status = StoreStatus.idle
        self._view = View.dashboard
        self._chart_range = ChartRange.days_90
        self._analysis: MarketAnalysis | None = None
        self._selected_symbol: str | None = None
        self._error: StoreError | None = None
        self._last_exception: AppError | Exception | None = None
        self._last_updated: str | None = None
        self._credential_override: str | None = None

    @property
    def status(self) -> StoreStatus:
        return self._status

    @property
    def analysis(self) -> MarketAnalysis | None:
        return self._analysis

    @property
    def last_exception(self) -> Exception | None:
        return self._last_exception

    def snapshot(self) -> DashboardState:
        return DashboardState(
            status=self._status,
            view=self._view,
            chart_range=self._chart_range,
            analysis=self._analysis,
            selected_symbol=self._selected_symbol,
            error=self._error,
            last_updated=self._last_updated,
        )

    async def load(self, override_credential: str | None = None) -> DashboardState:
        # Status flips before the first await so an overlapping call sees it.
        if self._status is StoreStatus.loading:
            logger.warning("analysis_load_ignored", reason="load already in flight")
            return self.snapshot()

        previous = (self._status, self._error, self._last_exception)
        self._status = StoreStatus.loading
        self._error = None
        self._last_exception = None
        override = override_credential if override_credential and override_credential.strip() else None
        logger.info("analysis_load_started", override=override is not None)

        try:
            credential = self._resolver.resolve(override or self._credential_override)
            analysis = await self._client.fetch_analysis(credential)
        except asyncio.CancelledError:
            self._status, self._error, self._last_exception = previous
            logger.warning("analysis_load_cancelled", restored_status=self._status)
            raise
        except AppError as exc:
            self._fail(exc)
        except Exception as exc:
            logger.exception("analysis_load_unexpected_error")
            self._fail(exc)
        else:
            if override:
                self._credential_override = credential
            self._apply(analysis)
        return self.snapshot()

    def select_stock(self, symbol: str) -> DashboardState:
        if self._analysis is not None:
            stock = self._analysis.find(symbol)
            if stock is not None:
                self._selected_symbol = stock.symbol
        return self.snapshot()

    def set_view(self, view: View) -> DashboardState:
        self._view = View(view)
        return self.snapshot()

    def set_chart_range(self, chart_range: ChartRange) -> DashboardState:
        self._chart_range = ChartRange(chart_range)
        return self.snapshot()

    def _apply(self, analysis: MarketAnalysis) -> None:
        self._analysis = analysis
        self._status = StoreStatus.ready
        self._last_updated = datetime.now(UTC).isoformat()

        if self._selected_symbol is None or analysis.find(self._selected_symbol) is None:
            self._selected_symbol = analysis.top_positive[0].symbol if analysis.top_positive else None

        logger.info(
            "analysis_load_done",
            selected=self._selected_symbol,
            positive=len(analysis.top_positive),
            negative=len(analysis.top_negative),
        )

    def _fail(self, exc: Exception) -> None:
        self._status = StoreStatus.failed
        self._error = classify_error(exc)
        self._last_exception = exc
        if self._error.credential_required:
            self._credential_override = None
        # Stale analysis and selection are kept for display next to the error.
        logger.error(
            "analysis_load_failed",
            code=self._error.code,
            credential_required=self._error.credential_required,
            stale_data=self._analysis is not None,
        )
