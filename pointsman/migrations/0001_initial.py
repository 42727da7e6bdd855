# Generated migration for the points ledger

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PointsAccount",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "account_id",
                    models.CharField(
                        help_text="Внешний идентификатор пользователя (например, Telegram ID)",
                        max_length=64,
                        unique=True,
                        verbose_name="идентификатор",
                    ),
                ),
                ("display_name", models.CharField(blank=True, max_length=150, verbose_name="имя")),
                (
                    "balance",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Баллы, доступные для списания",
                        verbose_name="баланс",
                    ),
                ),
                (
                    "lifetime_points",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Всего начислено баллов (никогда не уменьшается)",
                        verbose_name="накоплено за всё время",
                    ),
                ),
                (
                    "tier",
                    models.CharField(
                        choices=[
                            ("bronze", "Бронза"),
                            ("silver", "Серебро"),
                            ("gold", "Золото"),
                            ("platinum", "Платина"),
                        ],
                        default="bronze",
                        max_length=20,
                        verbose_name="уровень",
                    ),
                ),
                ("total_orders", models.PositiveIntegerField(default=0, verbose_name="заказов")),
                ("total_spent", models.PositiveBigIntegerField(default=0, verbose_name="потрачено")),
                (
                    "welcome_bonus_received",
                    models.BooleanField(default=False, verbose_name="приветственный бонус получен"),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="активен")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="создан")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="обновлён")),
            ],
            options={
                "verbose_name": "счёт баллов",
                "verbose_name_plural": "счета баллов",
                "db_table": "pointsman_account",
                "indexes": [
                    models.Index(fields=["-lifetime_points"], name="pointsman_acc_lifetime_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="PointsTransaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "transaction_type",
                    models.CharField(
                        choices=[
                            ("task_completion", "Выполнение задания"),
                            ("order_reward", "Кэшбэк за заказ"),
                            ("referral_bonus", "Реферальный бонус"),
                            ("admin_adjustment", "Корректировка"),
                            ("redemption", "Списание"),
                            ("expiration", "Истечение срока"),
                        ],
                        max_length=20,
                        verbose_name="тип",
                    ),
                ),
                (
                    "amount",
                    models.IntegerField(
                        help_text="Положительное — начисление, отрицательное — списание",
                        verbose_name="баллы",
                    ),
                ),
                (
                    "balance_after",
                    models.PositiveIntegerField(
                        help_text="Баланс после этой операции",
                        verbose_name="баланс после",
                    ),
                ),
                ("description", models.CharField(blank=True, max_length=200, verbose_name="описание")),
                (
                    "reference",
                    models.CharField(
                        blank=True,
                        help_text="Внешний идентификатор (например, order:VH-123)",
                        max_length=100,
                        verbose_name="ссылка",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="создана")),
                ("created_by", models.CharField(blank=True, max_length=100, verbose_name="автор")),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="transactions",
                        to="pointsman.pointsaccount",
                        verbose_name="счёт",
                    ),
                ),
            ],
            options={
                "verbose_name": "операция с баллами",
                "verbose_name_plural": "операции с баллами",
                "db_table": "pointsman_transaction",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["account", "-created_at"], name="pointsman_tx_account_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProcessedEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "nonce",
                    models.CharField(
                        help_text="order:<номер заказа> или referral:<приглашённый>",
                        max_length=255,
                        unique=True,
                        verbose_name="nonce",
                    ),
                ),
                (
                    "source",
                    models.CharField(
                        choices=[("order", "Заказ"), ("referral", "Приглашение")],
                        db_index=True,
                        max_length=50,
                        verbose_name="источник",
                    ),
                ),
                ("processed_at", models.DateTimeField(auto_now_add=True, verbose_name="обработано")),
            ],
            options={
                "verbose_name": "обработанное событие",
                "verbose_name_plural": "обработанные события",
                "db_table": "pointsman_processed_event",
                "indexes": [
                    models.Index(fields=["source", "processed_at"], name="pointsman_event_source_idx"),
                ],
            },
        ),
    ]
