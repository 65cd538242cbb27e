# translations/mixins.py
from __future__ import annotations

import logging
from typing import Dict, Tuple

from django.core.exceptions import ImproperlyConfigured
from django.db import transaction

from .exceptions import KeyNotTranslatable
from .groups import Translations
from .locale import DjangoLocaleProvider, LocaleProvider
from .models import TranslationGroupField

logger = logging.getLogger(__name__)


class TranslatableMixin:
    """
    Adds per-locale fields to a Django model.

    For every `_<name> = TranslationGroupField()` declared on the model,
    `instance.name` reads/writes the value of the current locale, falling
    back to the fallback locale when the current one has no value:

        class Day(TranslatableMixin, models.Model):
            _name = TranslationGroupField()

        with translation.override("es"):
            day.name = "Lunes"

    `instance._name` stays the raw group id (it is what Django saves);
    use `translatable_get("_name")` or `get_translations("name")` for
    the Translations object itself.

    Locales come from `locale_provider` (class or instance attribute).
    """

    locale_provider: LocaleProvider = DjangoLocaleProvider()
    translations_class = Translations

    def __init__(self, *args, **kwargs):
        fields = self.translatable_fields()
        initial = {key: kwargs.pop(key) for key in list(kwargs) if key in fields}

        super().__init__(*args, **kwargs)

        if initial:
            # قيم الـ constructor ما تنكتب في جدول الترجمات إلا مع save()
            locale = self.translation_locale()
            self.__dict__["_pending_translations"] = {
                key: {locale: value} for key, value in initial.items()
            }

    @property
    def pending_translations(self) -> Dict[str, Dict[str, object]]:
        return self.__dict__.get("_pending_translations", {})

    def save(self, *args, **kwargs):
        """
        Writes constructor values together with the record, in one
        transaction. If the save fails nothing is left in the
        translation tables and the values stay pending.
        """
        pending = self.__dict__.get("_pending_translations")
        if not pending:
            return super().save(*args, **kwargs)

        fields = self.translatable_fields()
        previous = {fields[key]: self.__dict__[fields[key]] for key in pending}
        if kwargs.get("update_fields") is not None:
            kwargs["update_fields"] = set(kwargs["update_fields"]) | set(previous)

        try:
            with transaction.atomic(using=kwargs.get("using")):
                for key, values in pending.items():
                    self.get_translations(key).set_many(values)
                super().save(*args, **kwargs)
        except Exception:
            # rolled back: drop the group ids allocated for this save
            self.__dict__.update(previous)
            self.__dict__.pop("_translation_groups", None)
            raise

        del self.__dict__["_pending_translations"]

    # ------------------------------------------------------------------
    # Field map
    # ------------------------------------------------------------------
    @classmethod
    def translatable_fields(cls) -> Dict[str, str]:
        """
        {logical name: attname of its group id field}, e.g. {"name": "_name"}.
        Built once per model class.
        """
        if "_translatable_field_map" in cls.__dict__:
            return cls.__dict__["_translatable_field_map"]

        mapping = {}
        for field in cls._meta.concrete_fields:
            if not isinstance(field, TranslationGroupField):
                continue
            if not field.name.startswith("_") or len(field.name) < 2:
                raise ImproperlyConfigured(
                    f"{cls.__name__}.{field.name}: translation group fields "
                    f"must be named '_<field>'."
                )
            mapping[field.name[1:]] = field.attname

        cls._translatable_field_map = mapping
        return mapping

    # ------------------------------------------------------------------
    # Key classification
    # ------------------------------------------------------------------
    def is_translatable(self, key) -> bool:
        # self.name -> group id stored in self._name
        attname = self.translatable_fields().get(key)
        return attname is not None and attname in self.__dict__

    def is_translation(self, key) -> bool:
        # self._name -> the group id itself
        return (
            isinstance(key, str)
            and key.startswith("_")
            and self.translatable_fields().get(key[1:]) == key
            and key in self.__dict__
        )

    def _load_deferred_group(self, key) -> None:
        attname = self.translatable_fields().get(key)
        if attname is not None and attname in self.get_deferred_fields():
            # .only()/.defer() left the group id out; DeferredAttribute fetches it
            getattr(self, attname)

    def _group_attname(self, key) -> str:
        self._load_deferred_group(key)
        if self.is_translatable(key):
            return self.translatable_fields()[key]
        if self.is_translation(key):
            return key
        raise KeyNotTranslatable(key)

    def get_translation_id(self, key):
        return self.__dict__[self._group_attname(key)]

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------
    @property
    def translation_groups(self) -> Dict[int, Translations]:
        return self.__dict__.setdefault("_translation_groups", {})

    def get_translations(self, key) -> Translations:
        """
        Translations object behind `key` ("name" or "_name"), cached on the
        instance by group id. An empty group field gets a new group id.
        """
        attname = self._group_attname(key)
        group_id = self.__dict__[attname]
        groups = self.translation_groups

        if group_id is None:
            group = self.translations_class()
            self.__dict__[attname] = group.group_id
            groups[group.group_id] = group
            logger.debug(
                "%s.%s assigned translation group %s",
                type(self).__name__,
                attname,
                group.group_id,
            )
            return group

        if group_id not in groups:
            groups[group_id] = self.translations_class(group_id)
        return groups[group_id]

    def get_translation_dict(self, key) -> Dict[str, object]:
        return self.get_translations(key).as_dict()

    # ------------------------------------------------------------------
    # Locale hooks
    # ------------------------------------------------------------------
    def translation_locale(self) -> str:
        return self.locale_provider.current()

    def translation_fallback(self) -> str:
        return self.locale_provider.fallback()

    # ------------------------------------------------------------------
    # Interception
    # ------------------------------------------------------------------
    def translatable_get(self, key) -> Tuple[object, bool]:
        """
        Returns (value, handled). When handled is False the caller falls
        back to its own attribute lookup.
        """
        if self.is_translation(key):
            if self.get_translation_id(key) is None:
                # reading never allocates a group
                return None, True
            return self.get_translations(key), True

        if self.is_translatable(key):
            pending = self.pending_translations.get(key)
            if pending:
                for locale in (self.translation_locale(), self.translation_fallback()):
                    if locale in pending:
                        return pending[locale], True
            if self.get_translation_id(key) is None:
                return None, True
            translations = self.get_translations(key)
            return (
                translations.in_locale(
                    self.translation_locale(), self.translation_fallback()
                ),
                True,
            )

        return None, False

    def translatable_set(self, key, value) -> bool:
        if not self.is_translatable(key):
            return False

        pending = self.pending_translations.get(key)
        if pending is not None:
            pending[self.translation_locale()] = value
            return True

        self.get_translations(key).set(self.translation_locale(), value)
        return True

    def has_translatable(self, key) -> bool:
        return self.is_translatable(key) or key in self.__dict__ or hasattr(type(self), key)

    # ------------------------------------------------------------------
    # Attribute access wiring
    # ------------------------------------------------------------------
    def __getattr__(self, key):
        # Only called when normal lookup fails: fields, methods and
        # properties never get here.
        if key.startswith("__"):
            raise AttributeError(key)

        self._load_deferred_group(key)
        value, handled = self.translatable_get(key)
        if handled:
            return value

        raise AttributeError(
            f"'{type(self).__name__}' object has no attribute '{key}'"
        )

    def __setattr__(self, key, value):
        self._load_deferred_group(key)
        if self.translatable_set(key, value):
            return
        super().__setattr__(key, value)

    def __getstate__(self):
        # copies and pickles start with an empty group cache
        state = super().__getstate__()
        state.pop("_translation_groups", None)
        return state
