# parties/urls.py
from django.urls import path

from .views import PartyDetailView, PartyListCreateView

app_name = "parties"

urlpatterns = [
    path("", PartyListCreateView.as_view(), name="party-list"),
    path("<int:pk>/", PartyDetailView.as_view(), name="party-detail"),
]
