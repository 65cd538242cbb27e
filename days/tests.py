from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from django.utils import translation

from translations.models import Translation

from .models import Day


class SeedDaysCommandTests(TestCase):
    def seed(self):
        out = StringIO()
        call_command("seed_days", stdout=out)
        return out.getvalue()

    def test_seed_creates_week(self):
        output = self.seed()

        self.assertIn("Created day 1: Monday", output)
        self.assertEqual(Day.objects.count(), 7)
        self.assertEqual(Translation.objects.count(), 14)

        monday = Day.objects.get(number=1)
        with translation.override("en"):
            self.assertEqual(monday.name, "Monday")
        with translation.override("es"):
            self.assertEqual(monday.name, "Lunes")

    def test_seed_is_idempotent(self):
        self.seed()
        group_ids = list(Day.objects.values_list("_name", flat=True))

        output = self.seed()

        self.assertIn("Updated day 7: Sunday", output)
        self.assertEqual(Day.objects.count(), 7)
        self.assertEqual(Translation.objects.count(), 14)
        self.assertEqual(list(Day.objects.values_list("_name", flat=True)), group_ids)

    def test_each_day_has_its_own_group(self):
        self.seed()
        group_ids = set(Day.objects.values_list("_name", flat=True))
        self.assertEqual(len(group_ids), 7)
        self.assertNotIn(None, group_ids)


class DayModelTests(TestCase):
    def test_str_uses_translated_name(self):
        day = Day.objects.create(number=5)
        self.assertEqual(str(day), "Day 5")

        with translation.override("en"):
            day.name = "Friday"
        day.save()

        with translation.override("fr"):
            # fr has no value, falls back to TRANSLATIONS_FALLBACK_LOCALE
            self.assertEqual(str(Day.objects.get(number=5)), "Friday")
