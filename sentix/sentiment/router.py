from fastapi import APIRouter

from sentix.dashboard.schemas import DashboardState, RefreshRequest, StoreStatus, View
from sentix.dependencies import StoreDep
from sentix.exceptions import AppError, LoadInProgressError, NotFoundError
from sentix.sentiment.schemas import MarketAnalysis

router = APIRouter()


@router.get("/state", response_model=DashboardState)
async def get_state(store: StoreDep) -> DashboardState:
    return store.snapshot()


@router.get("/analysis", response_model=MarketAnalysis)
async def get_analysis(store: StoreDep) -> MarketAnalysis:
    if store.analysis is None:
        raise NotFoundError("Analysis", "current")
    return store.analysis


@router.post("/refresh", response_model=DashboardState)
async def refresh(store: StoreDep, request: RefreshRequest | None = None) -> DashboardState:
    if store.status is StoreStatus.loading:
        raise LoadInProgressError()

    state = await store.load(request.api_key if request else None)
    if state.status is StoreStatus.failed:
        exc = store.last_exception
        if isinstance(exc, AppError):
            raise exc
        raise AppError(state.error.message if state.error else "Analysis refresh failed")
    return state


@router.post("/select/{symbol:path}", response_model=DashboardState)
async def select_stock(symbol: str, store: StoreDep) -> DashboardState:
    return store.select_stock(symbol)


@router.put("/view/{view}", response_model=DashboardState)
async def set_view(view: View, store: StoreDep) -> DashboardState:
    return store.set_view(view)
