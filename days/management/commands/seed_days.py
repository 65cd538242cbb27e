from django.core.management.base import BaseCommand
from django.db import transaction

from days.models import Day

WEEKDAYS = [
    (1, {"en": "Monday", "es": "Lunes"}),
    (2, {"en": "Tuesday", "es": "Martes"}),
    (3, {"en": "Wednesday", "es": "Miércoles"}),
    (4, {"en": "Thursday", "es": "Jueves"}),
    (5, {"en": "Friday", "es": "Viernes"}),
    (6, {"en": "Saturday", "es": "Sábado"}),
    (7, {"en": "Sunday", "es": "Domingo"}),
]


class Command(BaseCommand):
    help = "Seed the seven weekdays with English and Spanish names."

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.MIGRATE_HEADING("Seeding days..."))

        for number, names in WEEKDAYS:
            day, created = Day.objects.get_or_create(number=number)
            # أول مرة: get_translations يحجز مجموعة جديدة ولازم نحفظ رقمها
            needs_group = day._name is None

            day.get_translations("name").set_many(names)
            if needs_group:
                day.save(update_fields=["_name"])

            if created:
                self.stdout.write(self.style.SUCCESS(f"  [OK] Created day {number}: {names['en']}"))
            else:
                self.stdout.write(self.style.WARNING(f"  [..] Updated day {number}: {names['en']}"))

        self.stdout.write(self.style.SUCCESS("Done."))
