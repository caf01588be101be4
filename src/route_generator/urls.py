from django.urls import path

from route_generator import views

urlpatterns = [
    path("api/v1/health", views.health_view, name="health"),
    path("api/v1/route-points", views.route_points_view, name="route-points"),
    path("api/v1/route-metrics", views.route_metrics_view, name="route-metrics"),
    path("api/v1/route-speeds", views.route_speeds_view, name="route-speeds"),
]
