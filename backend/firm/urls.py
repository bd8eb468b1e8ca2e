# firm/urls.py
from django.urls import path

from .views import FirmSettingsView, ResetView

app_name = "firm"

urlpatterns = [
    path("settings/", FirmSettingsView.as_view(), name="settings"),
    path("reset/", ResetView.as_view(), name="reset"),
]
