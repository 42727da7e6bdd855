# Generated migration for inbox

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("pointsman", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200, verbose_name="заголовок")),
                ("message", models.TextField(verbose_name="текст")),
                ("reference", models.CharField(blank=True, max_length=100, verbose_name="ссылка")),
                ("is_read", models.BooleanField(default=False, verbose_name="прочитано")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="создано")),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notifications",
                        to="pointsman.pointsaccount",
                        verbose_name="счёт",
                    ),
                ),
            ],
            options={
                "verbose_name": "уведомление",
                "verbose_name_plural": "уведомления",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["account", "is_read"], name="pointsman_inbox_unread_idx"),
                ],
            },
        ),
    ]
