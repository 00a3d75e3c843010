from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from sentix.config import settings
from sentix.dashboard.chart import build_chart
from sentix.dashboard.formatting import platform_bar, register_filters
from sentix.dashboard.schemas import ChartRange, DashboardState, StoreStatus, View
from sentix.dependencies import StoreDep

router = APIRouter()

_templates_dir = Path(__file__).resolve().parent / "templates"
templates = Jinja2Templates(directory=str(_templates_dir))
register_filters(templates.env)


def _context(state: DashboardState) -> dict:
    stock = state.selected_stock
    chart = build_chart(stock, state.chart_range) if stock else None
    bars = []
    if stock:
        breakdown = stock.platform_breakdown
        bars = [
            platform_bar("Twitter / X", breakdown.twitter),
            platform_bar("Reddit", breakdown.reddit),
            platform_bar("News Media", breakdown.news),
        ]
    return {
        "state": state,
        "stock": stock,
        "chart": chart,
        "platform_bars": bars,
        "views": list(View),
        "chart_ranges": list(ChartRange),
    }


def _back_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


@router.get("/", response_class=HTMLResponse)
async def dashboard(request: Request, store: StoreDep) -> HTMLResponse:
    if settings.auto_load and store.status is StoreStatus.idle:
        await store.load()
    return templates.TemplateResponse(request, "index.html", _context(store.snapshot()))


@router.post("/refresh")
async def refresh(
    store: StoreDep, api_key: Annotated[str | None, Form()] = None
) -> RedirectResponse:
    await store.load(api_key)
    return _back_home()


@router.post("/select/{symbol:path}")
async def select_stock(symbol: str, store: StoreDep) -> RedirectResponse:
    store.select_stock(symbol)
    return _back_home()


@router.post("/view/{view}")
async def set_view(view: View, store: StoreDep) -> RedirectResponse:
    store.set_view(view)
    return _back_home()


@router.post("/range/{chart_range}")
async def set_chart_range(chart_range: ChartRange, store: StoreDep) -> RedirectResponse:
    store.set_chart_range(chart_range)
    return _back_home()
