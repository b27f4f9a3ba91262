"""
API views for Tournament lookups.
"""
from rest_framework.views import APIView
from rest_framework.response import Response
from apps.tournaments.serializers import TournamentSerializer
from apps.tournaments.selectors import list_active_tournaments


class ActiveTournamentListAPIView(APIView):
    """List active tournaments in display order."""

    def get(self, request):
        serializer = TournamentSerializer(list_active_tournaments(), many=True)
        return Response(serializer.data)
