"""Payment URL configuration."""

from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from modules.payments.views import PaymentViewSet, PurchaseView

router = DefaultRouter(trailing_slash=True)
router.register("payments", PaymentViewSet, basename="payment")

urlpatterns = [
    path("products/<int:pk>/buy/", PurchaseView.as_view(), name="product-buy"),
] + router.urls
