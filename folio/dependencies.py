"""FastAPI dependencies resolving services built by ``create_app``."""

from fastapi import Request

from folio.services.accounts import AccountService
from folio.services.charts import ChartService
from folio.services.profiles import ProfileReconciler


def get_accounts(request: Request) -> AccountService:
    return request.app.state.accounts


def get_profiles(request: Request) -> ProfileReconciler:
    return request.app.state.profiles


def get_charts(request: Request) -> ChartService:
    return request.app.state.charts
