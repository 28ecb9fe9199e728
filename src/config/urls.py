from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from django.urls import include, path

urlpatterns = [
    path("", include("modules.core.urls")),
    # Domain modules — versioned API
    path("api/v1/", include("modules.customers.urls")),
    # OpenAPI schema & docs
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
]
