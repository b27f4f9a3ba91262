"""
Selectors for Tournament read operations.
"""
from apps.tournaments.models import Tournament


def get_tournament_by_id(tournament_id):
    """Get a tournament by ID."""
    try:
        return Tournament.objects.get(id=tournament_id)
    except Tournament.DoesNotExist:
        return None


def list_active_tournaments():
    """Active tournaments in display order (used by the product forms)."""
    return Tournament.objects.active().ordered()
