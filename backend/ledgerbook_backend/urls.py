from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    # Operations endpoints (no auth required)
    path("_health/", include("ops.urls")),

    # Admin and API
    path("admin/", admin.site.urls),
    path("api/firm/", include("firm.urls")),
    path("api/accounting/", include("accounting.urls")),
    path("api/parties/", include("parties.urls")),
    path("api/inventory/", include("inventory.urls")),
    path("api/invoicing/", include("invoicing.urls")),
    path("api/reports/", include("reports.urls")),
]
