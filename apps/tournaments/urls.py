"""
URL routing for tournament endpoints.
"""
from django.urls import path
from apps.tournaments.api import ActiveTournamentListAPIView

app_name = 'tournaments'

urlpatterns = [
    path('', ActiveTournamentListAPIView.as_view(), name='list'),
]
