# translations/tests.py

import copy
import pickle

from django.core.exceptions import ImproperlyConfigured
from django.db import IntegrityError, models, transaction
from django.test import TestCase, override_settings
from django.test.utils import isolate_apps
from django.utils import translation

from days.models import Day

from .exceptions import KeyNotTranslatable, TranslationError
from .groups import Translations
from .locale import DjangoLocaleProvider, StaticLocaleProvider
from .mixins import TranslatableMixin
from .models import Translation, TranslationGroup, TranslationGroupField


class TranslationQuerySetTests(TestCase):
    def test_allocate_hands_out_distinct_ids(self):
        first = TranslationGroup.objects.allocate()
        second = TranslationGroup.objects.allocate()
        self.assertNotEqual(first.pk, second.pk)

    def test_empty_groups(self):
        used = TranslationGroup.objects.allocate()
        unused = TranslationGroup.objects.allocate()
        Translation.objects.create(group=used, locale="en", value="a")
        self.assertEqual(list(TranslationGroup.objects.empty()), [unused])

    def test_filters(self):
        TranslationGroup.objects.create(pk=1)
        TranslationGroup.objects.create(pk=2)
        Translation.objects.create(group_id=1, locale="en", value="Monday")
        Translation.objects.create(group_id=1, locale="es", value="Lunes")
        Translation.objects.create(group_id=2, locale="en", value="Tuesday")

        self.assertEqual(Translation.objects.for_group(1).count(), 2)
        self.assertEqual(Translation.objects.for_locale("en").count(), 2)
        self.assertEqual(
            list(
                Translation.objects.for_group(1)
                .in_locales(["es", "fr"])
                .values_list("value", flat=True)
            ),
            ["Lunes"],
        )

    def test_deleting_group_removes_its_translations(self):
        group = TranslationGroup.objects.allocate()
        Translation.objects.create(group=group, locale="en", value="a")
        group.delete()
        self.assertFalse(Translation.objects.exists())


class TranslationsGroupTests(TestCase):
    def setUp(self):
        TranslationGroup.objects.create(pk=7)
        Translation.objects.create(group_id=7, locale="en", value="Monday")
        self.group = Translations(7)

    def test_in_locale_returns_current_value(self):
        self.assertEqual(self.group.in_locale("en", "en"), "Monday")

    def test_in_locale_falls_back(self):
        self.assertEqual(self.group.in_locale("es", "en"), "Monday")

    def test_in_locale_without_any_value(self):
        self.assertIsNone(self.group.in_locale("es"))
        self.assertIsNone(self.group.in_locale("es", "fr"))

    def test_null_value_uses_fallback(self):
        self.group.set("es", None)
        self.assertTrue(self.group.has("es"))
        self.assertEqual(self.group.in_locale("es", "en"), "Monday")

    def test_set_persists_and_updates_loaded_rows(self):
        self.assertEqual(self.group.locales(), ["en"])

        self.group.set("es", "Lunes")

        self.assertEqual(self.group.in_locale("es", "en"), "Lunes")
        self.assertEqual(
            Translation.objects.get(group_id=7, locale="es").value, "Lunes"
        )

    def test_set_updates_existing_row(self):
        self.group.set("en", "Mon")
        self.assertEqual(Translation.objects.for_group(7).count(), 1)
        self.assertEqual(Translations(7).get("en"), "Mon")

    def test_set_many(self):
        self.group.set_many({"es": "Lunes", "fr": "Lundi"})
        self.assertEqual(
            Translations(7).as_dict(),
            {"en": "Monday", "es": "Lunes", "fr": "Lundi"},
        )

    def test_container_protocol(self):
        self.group.set("es", "Lunes")
        self.assertIn("es", self.group)
        self.assertNotIn("fr", self.group)
        self.assertEqual(len(self.group), 2)
        self.assertEqual(sorted(self.group), ["en", "es"])

    def test_delete_one_locale(self):
        self.group.set("es", "Lunes")
        self.assertEqual(self.group.delete("es"), 1)
        self.assertEqual(self.group.locales(), ["en"])
        self.assertFalse(Translation.objects.filter(group_id=7, locale="es").exists())

    def test_delete_whole_group(self):
        self.group.set("es", "Lunes")
        self.assertEqual(self.group.delete(), 2)
        self.assertEqual(len(self.group), 0)
        self.assertFalse(Translation.objects.for_group(7).exists())

    def test_rows_are_loaded_once(self):
        self.group.locales()
        Translation.objects.create(group_id=7, locale="de", value="Montag")
        self.assertFalse(self.group.has("de"))
        self.assertTrue(self.group.refresh().has("de"))

    def test_new_group_allocates_id(self):
        group = Translations()
        self.assertNotIn(group.group_id, (None, 7))
        self.assertTrue(TranslationGroup.objects.filter(pk=group.group_id).exists())
        self.assertEqual(len(group), 0)

    def test_emptied_group_keeps_its_id(self):
        self.group.delete()
        self.assertTrue(TranslationGroup.objects.filter(pk=7).exists())
        self.assertNotEqual(Translations().group_id, 7)

    def test_set_is_logged(self):
        with self.assertLogs("translations.groups", level="INFO") as logs:
            self.group.set("es", "Lunes")
        self.assertIn("group 7 [es]", logs.output[0])


class LocaleProviderTests(TestCase):
    def test_django_provider_follows_active_language(self):
        provider = DjangoLocaleProvider()
        with translation.override("es"):
            self.assertEqual(provider.current(), "es")

    @override_settings(TRANSLATIONS_FALLBACK_LOCALE="fr")
    def test_django_provider_fallback_setting(self):
        self.assertEqual(DjangoLocaleProvider().fallback(), "fr")

    @override_settings(TRANSLATIONS_FALLBACK_LOCALE=None, LANGUAGE_CODE="ar")
    def test_django_provider_fallback_defaults_to_language_code(self):
        self.assertEqual(DjangoLocaleProvider().fallback(), "ar")

    def test_static_provider(self):
        self.assertEqual(StaticLocaleProvider("es", "en").current(), "es")
        self.assertEqual(StaticLocaleProvider("es", "en").fallback(), "en")
        self.assertEqual(StaticLocaleProvider("es").fallback(), "es")


class TranslatableMixinTests(TestCase):
    def setUp(self):
        TranslationGroup.objects.create(pk=7)
        Translation.objects.create(group_id=7, locale="en", value="Monday")
        self.day = Day.objects.create(number=1, _name=7)
        self.day.locale_provider = StaticLocaleProvider("en", "en")

    # --- classification --------------------------------------------------
    def test_translatable_fields(self):
        self.assertEqual(Day.translatable_fields(), {"name": "_name"})

    def test_is_translatable(self):
        self.assertTrue(self.day.is_translatable("name"))
        self.assertFalse(self.day.is_translatable("_name"))
        self.assertFalse(self.day.is_translatable("number"))
        self.assertFalse(self.day.is_translatable("other"))

    def test_is_translation(self):
        self.assertTrue(self.day.is_translation("_name"))
        self.assertFalse(self.day.is_translation("name"))
        self.assertFalse(self.day.is_translation("_state"))
        self.assertFalse(self.day.is_translation("_other"))

    def test_get_translation_id(self):
        self.assertEqual(self.day.get_translation_id("name"), 7)
        self.assertEqual(self.day.get_translation_id("_name"), 7)

    def test_get_translation_id_unknown_key(self):
        with self.assertRaises(KeyNotTranslatable) as ctx:
            self.day.get_translation_id("other")
        self.assertEqual(ctx.exception.key, "other")
        self.assertIsInstance(ctx.exception, KeyError)
        self.assertIsInstance(ctx.exception, TranslationError)
        self.assertEqual(str(ctx.exception), "Key 'other' is not translatable")

    def test_get_translations_unknown_key(self):
        with self.assertRaises(KeyNotTranslatable):
            self.day.get_translations("number")

    # --- group cache -------------------------------------------------------
    def test_get_translations_is_cached(self):
        group = self.day.get_translations("name")
        self.assertIs(self.day.get_translations("name"), group)
        self.assertIs(self.day.get_translations("_name"), group)
        self.assertEqual(group.group_id, 7)

    def test_cache_is_per_instance(self):
        other = Day.objects.get(pk=self.day.pk)
        self.assertIsNot(
            other.get_translations("name"), self.day.get_translations("name")
        )

    def test_copies_do_not_share_cache(self):
        group = self.day.get_translations("name")
        self.assertIsNot(copy.copy(self.day).get_translations("name"), group)
        self.assertIsNot(
            pickle.loads(pickle.dumps(self.day)).get_translations("name"), group
        )

    # --- get / set ----------------------------------------------------------
    def test_translatable_get(self):
        self.assertEqual(self.day.translatable_get("name"), ("Monday", True))

        group, handled = self.day.translatable_get("_name")
        self.assertTrue(handled)
        self.assertIs(group, self.day.get_translations("name"))
        self.assertEqual(group.group_id, 7)

        self.assertEqual(self.day.translatable_get("other"), (None, False))

    def test_translatable_set(self):
        self.day.locale_provider = StaticLocaleProvider("es", "en")

        self.assertTrue(self.day.translatable_set("name", "Lunes"))
        self.assertFalse(self.day.translatable_set("other", "x"))

        self.assertEqual(
            Translation.objects.get(group_id=7, locale="es").value, "Lunes"
        )
        self.assertEqual(Translations(7).in_locale("es", "en"), "Lunes")

    def test_set_then_get_same_locale(self):
        self.day.locale_provider = StaticLocaleProvider("fr", "en")
        self.day.translatable_set("name", "Lundi")
        self.assertEqual(self.day.translatable_get("name"), ("Lundi", True))

    def test_get_falls_back(self):
        self.day.locale_provider = StaticLocaleProvider("es", "en")
        self.assertEqual(self.day.translatable_get("name"), ("Monday", True))

    def test_get_translation_dict(self):
        Translation.objects.create(group_id=7, locale="es", value="Lunes")
        self.assertEqual(
            self.day.get_translation_dict("name"), {"en": "Monday", "es": "Lunes"}
        )

    # --- attribute wiring ---------------------------------------------------
    def test_attribute_access(self):
        self.assertEqual(self.day.name, "Monday")
        self.assertEqual(self.day._name, 7)

        self.day.locale_provider = StaticLocaleProvider("es", "en")
        self.day.name = "Lunes"
        self.assertEqual(self.day.name, "Lunes")
        self.assertNotIn("name", self.day.__dict__)

    def test_attribute_access_uses_active_language(self):
        day = Day.objects.get(pk=self.day.pk)
        with translation.override("es"):
            day.name = "Lunes"
            self.assertEqual(day.name, "Lunes")
        with translation.override("en"):
            self.assertEqual(day.name, "Monday")

    def test_plain_attributes_fall_through(self):
        self.day.number = 2
        self.day.save()
        self.assertEqual(Day.objects.get(pk=self.day.pk).number, 2)

        with self.assertRaises(AttributeError):
            self.day.other
        self.assertFalse(hasattr(self.day, "other"))

    def test_has_translatable(self):
        self.assertTrue(self.day.has_translatable("name"))
        self.assertTrue(self.day.has_translatable("number"))
        self.assertTrue(self.day.has_translatable("save"))
        self.assertFalse(self.day.has_translatable("other"))

    def test_empty_group_reads_none_without_allocating(self):
        day = Day(number=2)
        self.assertIsNone(day.name)
        self.assertIsNone(day._name)

    def test_reading_group_object_does_not_allocate(self):
        day = Day(number=2)
        self.assertEqual(day.translatable_get("_name"), (None, True))
        self.assertIsNone(day._name)
        self.assertEqual(TranslationGroup.objects.count(), 1)

    def test_unsaved_instances_get_their_own_groups(self):
        first = Day(number=2)
        second = Day(number=3)
        self.assertNotEqual(
            first.get_translations("name").group_id,
            second.get_translations("name").group_id,
        )

    def test_emptied_group_is_not_reused(self):
        with translation.override("en"):
            tuesday = Day.objects.create(number=2, name="Tuesday")
            tuesday.get_translations("name").delete()
            wednesday = Day.objects.create(number=3, name="Wednesday")

        self.assertNotEqual(tuesday._name, wednesday._name)
        with translation.override("en"):
            tuesday.name = "Tue"
            self.assertEqual(Day.objects.get(number=3).name, "Wednesday")

    def test_empty_group_allocates_on_write(self):
        day = Day(number=2)
        day.name = "Tuesday"

        self.assertNotIn(day._name, (None, 7))
        day.save()
        self.assertEqual(Day.objects.get(number=2).name, "Tuesday")

    def test_constructor_kwargs(self):
        with translation.override("es"):
            day = Day.objects.create(number=3, name="Miércoles")
        self.assertIsNotNone(day._name)

        fetched = Day.objects.get(number=3)
        with translation.override("es"):
            self.assertEqual(fetched.name, "Miércoles")
        # no English value: nothing to fall back to
        self.assertIsNone(fetched.name)

    def test_constructor_values_wait_for_save(self):
        with translation.override("es"):
            day = Day(number=2, name="Martes")
            self.assertEqual(day.name, "Martes")
            day.name = "Martes!"
            self.assertIsNone(day._name)
            self.assertFalse(Translation.objects.filter(locale="es").exists())

            day.save()

        self.assertIsNotNone(day._name)
        self.assertEqual(day.pending_translations, {})
        with translation.override("es"):
            self.assertEqual(Day.objects.get(number=2).name, "Martes!")

    def test_failed_create_leaves_no_translations(self):
        groups = TranslationGroup.objects.count()
        translations = Translation.objects.count()

        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                # number=1 already exists
                Day.objects.create(number=1, name="Duplicate")

        self.assertEqual(TranslationGroup.objects.count(), groups)
        self.assertEqual(Translation.objects.count(), translations)

    def test_deferred_group_field_is_loaded_on_write(self):
        day = Day.objects.only("number").get(pk=self.day.pk)
        self.assertIn("_name", day.get_deferred_fields())

        with translation.override("es"):
            day.name = "Lunes"
            self.assertNotIn("name", day.__dict__)
            self.assertEqual(day._name, 7)
            self.assertEqual(day.name, "Lunes")
        self.assertEqual(
            Translation.objects.get(group_id=7, locale="es").value, "Lunes"
        )

    def test_deferred_group_field_is_loaded_on_read(self):
        day = Day.objects.defer("_name").get(pk=self.day.pk)
        with translation.override("en"):
            self.assertEqual(day.name, "Monday")


class TranslationGroupFieldTests(TestCase):
    def test_defaults(self):
        field = Day._meta.get_field("_name")
        self.assertTrue(field.null)
        self.assertFalse(field.editable)

    @isolate_apps("days")
    def test_group_field_must_start_with_underscore(self):
        class BadDay(TranslatableMixin, models.Model):
            label = TranslationGroupField()

            class Meta:
                app_label = "days"

        with self.assertRaises(ImproperlyConfigured):
            BadDay.translatable_fields()
