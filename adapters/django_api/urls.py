"""
SPS Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("storage-policies", views.storage_policies_view),
    path("storage-policies/evaluate", views.storage_policy_evaluate_view),
    path(
        "storage-policies/<str:classification_key>",
        views.storage_policy_detail_view,
    ),
]
