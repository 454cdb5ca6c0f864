"""Account URL configuration."""

from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from modules.accounts.views import BankAccountViewSet, MeView

router = DefaultRouter(trailing_slash=True)
router.register("bank-accounts", BankAccountViewSet, basename="bank-account")

urlpatterns = [
    path("me", MeView.as_view(), name="me"),
    *router.urls,
]
