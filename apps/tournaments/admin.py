from django.contrib import admin
from apps.tournaments.models import Tournament


@admin.register(Tournament)
class TournamentAdmin(admin.ModelAdmin):
    list_display = ('name', 'is_active', 'display_order', 'starts_at', 'created_at')
    list_filter = ('is_active',)
    list_editable = ('is_active', 'display_order')
    search_fields = ('name',)
    ordering = ('display_order', 'name')
