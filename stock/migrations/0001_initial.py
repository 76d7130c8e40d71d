import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(db_index=True, max_length=255, verbose_name='name')),
                ('code', models.CharField(blank=True, help_text='Optional external / QC code. Unique when present.', max_length=100, null=True, unique=True, verbose_name='code')),
                ('maintaining_qty', models.PositiveIntegerField(default=0, help_text='Stock at or below this level is flagged as warning.', verbose_name='maintaining quantity')),
                ('critical_qty', models.PositiveIntegerField(default=0, help_text='Stock at or below this level is flagged as critical.', verbose_name='critical quantity')),
                ('is_active', models.BooleanField(db_index=True, default=True, verbose_name='active')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='updated by')),
            ],
            options={
                'verbose_name': 'product',
                'verbose_name_plural': 'products',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='StockTransaction',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField(db_index=True, verbose_name='date')),
                ('qty_in', models.PositiveIntegerField(default=0, verbose_name='quantity in')),
                ('qty_out', models.PositiveIntegerField(default=0, verbose_name='quantity out')),
                ('reference_no', models.CharField(blank=True, help_text='PO number, job order, delivery receipt…', max_length=255, verbose_name='reference no.')),
                ('remarks', models.TextField(blank=True, verbose_name='remarks')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='created by')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='transactions', to='stock.product', verbose_name='product')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='updated by')),
            ],
            options={
                'verbose_name': 'stock transaction',
                'verbose_name_plural': 'stock transactions',
                'ordering': ['date', 'created_at', 'id'],
                'indexes': [
                    models.Index(fields=['product', 'date', 'created_at'], name='stock_tx_ledger_idx'),
                    models.Index(fields=['date', 'created_at'], name='stock_tx_date_idx'),
                ],
            },
        ),
    ]
