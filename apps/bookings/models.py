from django.db import models


class Booking(models.Model):
    """A customer's booking of a product."""

    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('confirmed', 'Confirmed'),
        ('cancelled', 'Cancelled'),
    ]

    product = models.ForeignKey('products.Product', on_delete=models.CASCADE, related_name='bookings')
    customer_name = models.CharField(max_length=255)
    customer_email = models.EmailField()
    quantity = models.PositiveIntegerField(default=1)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending', db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'bookings'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.customer_name} x{self.quantity} - {self.status}"
