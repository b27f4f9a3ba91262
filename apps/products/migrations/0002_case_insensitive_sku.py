"""
Migration to add case-insensitive unique constraint on SKU field.
"""
import django.db.models.functions.text
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('products', '0001_initial'),
    ]

    operations = [
        # NULL skus never collide, so products without a sku are unaffected
        migrations.AddConstraint(
            model_name='product',
            constraint=models.UniqueConstraint(django.db.models.functions.text.Lower('sku'), name='products_sku_lower_unique'),
        ),
    ]
