"""Shared FastAPI dependencies wiring the store and services per request."""
from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from funeral_desk.core.clock import Clock, local_now
from funeral_desk.core.config import get_settings
from funeral_desk.db import create_sync_engine
from funeral_desk.services import (
    AuthService,
    CasesService,
    ContractsService,
    InventoryService,
    LinePushClient,
    NotifyService,
    PaymentService,
    ProcurementService,
    ReminderService,
    ReportService,
    ScheduleService,
    VendorService,
)
from funeral_desk.store import SqlTabularStore, TabularStore


@lru_cache(maxsize=1)
def _default_store() -> SqlTabularStore:
    store = SqlTabularStore(create_sync_engine())
    store.create_tables()
    return store


def get_store() -> TabularStore:
    """Return the process-wide row store."""

    return _default_store()


def get_clock() -> Clock:
    return local_now


def get_auth_service(store: TabularStore = Depends(get_store)) -> AuthService:
    return AuthService(store)


def get_cases_service(
    store: TabularStore = Depends(get_store), clock: Clock = Depends(get_clock)
) -> CasesService:
    return CasesService(store, now=clock)


def get_contracts_service(
    store: TabularStore = Depends(get_store), clock: Clock = Depends(get_clock)
) -> ContractsService:
    return ContractsService(store, now=clock, currency_symbol=get_settings().currency_symbol)


def get_schedule_service(
    store: TabularStore = Depends(get_store), clock: Clock = Depends(get_clock)
) -> ScheduleService:
    return ScheduleService(store, now=clock)


def get_reminder_service(
    store: TabularStore = Depends(get_store), clock: Clock = Depends(get_clock)
) -> ReminderService:
    return ReminderService(store, now=clock)


def get_inventory_service(
    store: TabularStore = Depends(get_store), clock: Clock = Depends(get_clock)
) -> InventoryService:
    return InventoryService(store, now=clock)


def get_payment_service(
    store: TabularStore = Depends(get_store), clock: Clock = Depends(get_clock)
) -> PaymentService:
    return PaymentService(store, now=clock)


def get_procurement_service(
    store: TabularStore = Depends(get_store), clock: Clock = Depends(get_clock)
) -> ProcurementService:
    return ProcurementService(store, now=clock)


def get_vendor_service(
    store: TabularStore = Depends(get_store), clock: Clock = Depends(get_clock)
) -> VendorService:
    return VendorService(store, now=clock)


def get_report_service(store: TabularStore = Depends(get_store)) -> ReportService:
    return ReportService(store, policy=get_settings().contract_policy)


def get_push_client() -> LinePushClient:
    return LinePushClient(get_settings().notify)


def get_notify_service(
    store: TabularStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
    push_client: LinePushClient = Depends(get_push_client),
) -> NotifyService:
    return NotifyService(store, push_client, now=clock)
