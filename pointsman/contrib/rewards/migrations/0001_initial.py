# Generated migration for rewards

import django.db.models.deletion
from django.db import migrations, models

import pointsman.contrib.rewards.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("pointsman", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Reward",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200, verbose_name="название")),
                ("description", models.TextField(blank=True, verbose_name="описание")),
                (
                    "reward_type",
                    models.CharField(
                        choices=[
                            ("free_drink", "Бесплатный напиток"),
                            ("discount_percent", "Скидка в процентах"),
                            ("discount_fixed", "Фиксированная скидка"),
                            ("free_upgrade", "Бесплатное улучшение"),
                            ("bonus_points", "Бонусные баллы"),
                            ("exclusive_item", "Эксклюзивный товар"),
                            ("custom", "Другое"),
                        ],
                        default="custom",
                        max_length=20,
                        verbose_name="тип",
                    ),
                ),
                ("points_cost", models.PositiveIntegerField(default=0, verbose_name="стоимость")),
                (
                    "points_awarded",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Баллы, начисляемые при получении награды",
                        verbose_name="начисляется баллов",
                    ),
                ),
                ("promo_code", models.CharField(blank=True, max_length=50, verbose_name="промокод")),
                (
                    "stock_remaining",
                    models.PositiveIntegerField(
                        blank=True,
                        help_text="Пусто — без ограничения",
                        null=True,
                        verbose_name="остаток",
                    ),
                ),
                ("validity_days", models.PositiveIntegerField(default=30, verbose_name="срок действия (дней)")),
                ("is_active", models.BooleanField(default=True, verbose_name="активна")),
                ("is_featured", models.BooleanField(default=False, verbose_name="популярная")),
                ("sort_order", models.IntegerField(default=0, verbose_name="порядок")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="создана")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="обновлена")),
            ],
            options={
                "verbose_name": "награда",
                "verbose_name_plural": "награды",
                "ordering": ["sort_order", "points_cost", "id"],
            },
        ),
        migrations.CreateModel(
            name="RewardClaim",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "redemption_code",
                    models.CharField(
                        default=pointsman.contrib.rewards.models.generate_redemption_code,
                        max_length=20,
                        unique=True,
                        verbose_name="код получения",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("claimed", "Получена"), ("used", "Использована")],
                        db_index=True,
                        default="claimed",
                        max_length=10,
                        verbose_name="статус",
                    ),
                ),
                ("reward_name", models.CharField(max_length=200, verbose_name="название награды")),
                ("points_cost_at_claim", models.PositiveIntegerField(verbose_name="списано")),
                ("points_awarded_at_claim", models.PositiveIntegerField(verbose_name="начислено")),
                ("promo_code_at_claim", models.CharField(blank=True, max_length=50, verbose_name="промокод")),
                ("claimed_at", models.DateTimeField(auto_now_add=True, verbose_name="получена")),
                ("expires_at", models.DateTimeField(blank=True, null=True, verbose_name="действует до")),
                ("used_at", models.DateTimeField(blank=True, null=True, verbose_name="использована")),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reward_claims",
                        to="pointsman.pointsaccount",
                        verbose_name="счёт",
                    ),
                ),
                (
                    "reward",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="claims",
                        to="pointsman_rewards.reward",
                        verbose_name="награда",
                    ),
                ),
            ],
            options={
                "verbose_name": "полученная награда",
                "verbose_name_plural": "полученные награды",
                "ordering": ["-claimed_at", "-id"],
            },
        ),
    ]
