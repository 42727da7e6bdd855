"""Management command to create the default quest set."""

from django.core.management.base import BaseCommand

from pointsman.contrib.quests.models import Quest, QuestType

DEFAULT_QUESTS = [
    {
        "slug": "link_telegram",
        "title": "Привязать Telegram",
        "description": "Привяжите аккаунт Telegram к профилю",
        "quest_type": QuestType.LINK_TELEGRAM,
        "target_value": 1,
        "reward_points": 100,
        "sort_order": 10,
    },
    {
        "slug": "link_email",
        "title": "Добавить Email",
        "description": "Укажите адрес электронной почты в профиле",
        "quest_type": QuestType.LINK_EMAIL,
        "target_value": 1,
        "reward_points": 50,
        "sort_order": 20,
    },
    {
        "slug": "first_order",
        "title": "Первый заказ",
        "description": "Сделайте первый заказ в автомате",
        "quest_type": QuestType.FIRST_ORDER,
        "target_value": 1,
        "reward_points": 200,
        "sort_order": 30,
    },
    {
        "slug": "order_5",
        "title": "Постоянный клиент",
        "description": "Сделайте 5 заказов",
        "quest_type": QuestType.ORDER,
        "target_value": 5,
        "reward_points": 300,
        "sort_order": 40,
    },
    {
        "slug": "daily_login",
        "title": "Ежедневный визит",
        "description": "Открывайте приложение каждый день",
        "quest_type": QuestType.DAILY_LOGIN,
        "target_value": 1,
        "reward_points": 10,
        "is_repeatable": True,
        "repeat_cooldown_hours": 24,
        "sort_order": 50,
    },
]


class Command(BaseCommand):
    help = "Create the default quests (existing slugs are left untouched unless --update)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--update",
            action="store_true",
            help="Overwrite existing quests with the default values",
        )

    def handle(self, *args, **options):
        created_count = 0
        for data in DEFAULT_QUESTS:
            defaults = {k: v for k, v in data.items() if k != "slug"}
            if options["update"]:
                _, created = Quest.objects.update_or_create(slug=data["slug"], defaults=defaults)
            else:
                _, created = Quest.objects.get_or_create(slug=data["slug"], defaults=defaults)
            created_count += created

        self.stdout.write(
            self.style.SUCCESS(
                f"Created {created_count} quests ({len(DEFAULT_QUESTS) - created_count} already existed)."
            )
        )
