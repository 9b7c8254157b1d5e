# logistics_core/migrations/0001_initial.py

import django.db.models.deletion
from django.db import migrations, models


STATUS_CHOICES = [
    ("pending", "At original owner"),
    ("at_org", "Held by organizers"),
    ("delivered", "Delivered to receiving member"),
]

ACTION_CHOICES = [
    ("delivered", "Received by organizers"),
    ("delivered_to_user", "Handed to receiving member"),
    ("pending", "Revert one step"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Member",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("first_name", models.CharField(max_length=120)),
                ("last_name", models.CharField(blank=True, max_length=120)),
                ("bgg_user", models.CharField(blank=True, max_length=120)),
                ("email", models.EmailField(blank=True, max_length=254)),
            ],
            options={
                "ordering": ["first_name", "last_name", "id"],
            },
        ),
        migrations.CreateModel(
            name="Item",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(max_length=255)),
                ("status", models.CharField(choices=STATUS_CHOICES, db_index=True, default="pending", max_length=16)),
                ("assigned_trade_code", models.PositiveIntegerField(blank=True, db_index=True, null=True)),
                ("table_number", models.CharField(blank=True, max_length=32)),
                ("box_number", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "owner",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="items_to_deliver",
                        to="logistics_core.member",
                    ),
                ),
                (
                    "recipient",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="items_to_receive",
                        to="logistics_core.member",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("status__in", ["pending", "at_org", "delivered"])),
                        name="item_status_valid",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="CustodyEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("item_id", models.PositiveIntegerField()),
                ("action", models.CharField(choices=ACTION_CHOICES, max_length=32)),
                ("from_status", models.CharField(choices=STATUS_CHOICES, max_length=16)),
                ("to_status", models.CharField(choices=STATUS_CHOICES, max_length=16)),
                ("actor_id", models.CharField(max_length=64)),
                ("role", models.CharField(max_length=32)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["item_id"], name="custody_event_item_idx")],
            },
        ),
    ]
