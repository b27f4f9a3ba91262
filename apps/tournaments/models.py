from django.db import models


class TournamentQuerySet(models.QuerySet):

    def active(self):
        return self.filter(is_active=True)

    def ordered(self):
        return self.order_by('display_order', 'name')


class Tournament(models.Model):
    """Tournament that products are sold for."""
    name = models.CharField(max_length=255)
    is_active = models.BooleanField(default=True, db_index=True)
    display_order = models.IntegerField(default=0)
    starts_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TournamentQuerySet.as_manager()

    class Meta:
        db_table = 'tournaments'

    def __str__(self):
        return self.name
