"""
URL configuration for config project.
"""
from django.contrib import admin
from django.urls import path
from ninja import NinjaAPI
from authentication.api import router as auth_router
from leads.api import router as leads_router

# Create NinjaAPI instance
api = NinjaAPI(
    title="iLandSpaces API",
    description="Customer requirement capture and lead triage API",
    version="1.0.0"
)

# Register API routers
api.add_router("/auth", auth_router, tags=["Authentication"])
api.add_router("/requirements", leads_router, tags=["Requirements"])


@api.get("/health", auth=None)
def health(request):
    """Liveness check"""
    return {"status": "ok"}


urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', api.urls),
]
