# Generated migration for quests

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("pointsman", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Quest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slug", models.SlugField(unique=True, verbose_name="код")),
                ("title", models.CharField(max_length=200, verbose_name="название")),
                ("description", models.TextField(blank=True, verbose_name="описание")),
                (
                    "quest_type",
                    models.CharField(
                        choices=[
                            ("order", "Заказы"),
                            ("spend", "Сумма заказов"),
                            ("first_order", "Первый заказ"),
                            ("referral", "Приглашения"),
                            ("visit", "Визиты"),
                            ("daily_login", "Ежедневный вход"),
                            ("link_telegram", "Привязка Telegram"),
                            ("link_email", "Привязка Email"),
                            ("share", "Репост"),
                            ("review", "Отзыв"),
                            ("custom", "Другое"),
                        ],
                        db_index=True,
                        max_length=20,
                        verbose_name="тип",
                    ),
                ),
                (
                    "target_value",
                    models.PositiveIntegerField(
                        default=1,
                        help_text="Значение прогресса, при котором задание выполнено",
                        verbose_name="цель",
                    ),
                ),
                ("reward_points", models.PositiveIntegerField(verbose_name="награда")),
                ("is_repeatable", models.BooleanField(default=False, verbose_name="повторяемое")),
                (
                    "repeat_cooldown_hours",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Только для повторяемых заданий",
                        verbose_name="пауза между повторами (ч)",
                    ),
                ),
                (
                    "max_completions",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Пусто — без ограничения",
                        null=True,
                        verbose_name="максимум выполнений",
                    ),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="активно")),
                ("sort_order", models.IntegerField(default=0, verbose_name="порядок")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="создано")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="обновлено")),
            ],
            options={
                "verbose_name": "задание",
                "verbose_name_plural": "задания",
                "ordering": ["sort_order", "id"],
            },
        ),
        migrations.CreateModel(
            name="QuestProgress",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("current_value", models.PositiveIntegerField(default=0, verbose_name="прогресс")),
                ("is_completed", models.BooleanField(default=False, verbose_name="выполнено")),
                ("reward_claimed", models.BooleanField(default=False, verbose_name="награда получена")),
                ("completion_count", models.PositiveIntegerField(default=0, verbose_name="выполнений")),
                ("last_completed_at", models.DateTimeField(blank=True, null=True, verbose_name="последнее выполнение")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="создано")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="обновлено")),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="quest_progress",
                        to="pointsman.pointsaccount",
                        verbose_name="счёт",
                    ),
                ),
                (
                    "quest",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="progress",
                        to="pointsman_quests.quest",
                        verbose_name="задание",
                    ),
                ),
            ],
            options={
                "verbose_name": "прогресс задания",
                "verbose_name_plural": "прогресс заданий",
                "constraints": [
                    models.UniqueConstraint(fields=("account", "quest"), name="pointsman_quest_progress_unique"),
                ],
            },
        ),
    ]
