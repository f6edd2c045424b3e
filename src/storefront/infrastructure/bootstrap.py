"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.application.place_order import PlaceOrderHandler
from storefront.application.payment_return import PaymentReturnReconciler
from storefront.application.session import Session
from storefront.domain.service.order_request_builder import OrderRequestBuilder
from storefront.infrastructure.config import Settings, load_settings
from storefront.infrastructure.http.api_client import ApiClient
from storefront.infrastructure.http.http_order_gateway import HttpOrderGateway
from storefront.infrastructure.http.http_payment_gateway import HttpPaymentGateway
from storefront.infrastructure.persistence.key_value_storage import JsonFileStorage
from storefront.infrastructure.persistence.storage_cart_repository import (
    StorageCartRepository,
)
from storefront.infrastructure.persistence.storage_profile_repository import (
    StorageProfileRepository,
)


def storage(settings: Settings | None = None) -> JsonFileStorage:
    settings = settings or load_settings()
    return JsonFileStorage(settings.data_dir / "storage.json")


def profile_repository(settings: Settings | None = None) -> StorageProfileRepository:
    return StorageProfileRepository(storage(settings))


def open_session(settings: Settings | None = None) -> Session:
    local = storage(settings)
    return Session.open(
        profile_repo=StorageProfileRepository(local),
        cart_repo=StorageCartRepository(local),
    )


def api_client(session: Session, settings: Settings | None = None) -> ApiClient:
    settings = settings or load_settings()
    # A 401 means the stored credentials are dead: forget them.
    return ApiClient(
        base_url=settings.api_url,
        token=session.auth_token,
        timeout=settings.http_timeout,
        on_unauthorized=profile_repository(settings).clear,
    )


def place_order_handler(session: Session, settings: Settings | None = None) -> PlaceOrderHandler:
    settings = settings or load_settings()
    client = api_client(session, settings)
    return PlaceOrderHandler(
        cart_store=session.cart_store,
        order_gateway=HttpOrderGateway(client),
        payment_gateway=HttpPaymentGateway(client),
        request_builder=OrderRequestBuilder(settings.image_base_url),
    )


def payment_return_reconciler(
    session: Session, settings: Settings | None = None
) -> PaymentReturnReconciler:
    client = api_client(session, settings)
    return PaymentReturnReconciler(
        cart_store=session.cart_store,
        payment_gateway=HttpPaymentGateway(client),
    )
