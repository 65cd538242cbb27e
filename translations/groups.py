# translations/groups.py
from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Mapping, Optional

from django.db import transaction

from .models import Translation, TranslationGroup

logger = logging.getLogger(__name__)


class Translations:
    """
    The locale -> value set of one translation group.

    Usage:

        group = Translations(7)
        group.set("es", "Lunes")
        group.in_locale("es", "en")   # "Lunes"
        group.in_locale("fr", "en")   # value stored for "en", if any

    Rows are loaded from the database on first read and kept on the
    object. Writes go to the database immediately.
    """

    def __init__(self, group_id: Optional[int] = None) -> None:
        if group_id is None:
            group_id = TranslationGroup.objects.allocate().pk
            logger.debug("Allocated new translation group %s", group_id)
        self.group_id = group_id
        self._rows: Optional[Dict[str, Translation]] = None

    def __repr__(self) -> str:
        return f"<Translations group={self.group_id}>"

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    @property
    def rows(self) -> Dict[str, Translation]:
        if self._rows is None:
            self.refresh()
        return self._rows  # type: ignore[return-value]

    def refresh(self) -> "Translations":
        """
        (Re)load all rows of this group from the database.
        """
        self._rows = {
            row.locale: row for row in Translation.objects.for_group(self.group_id)
        }
        logger.debug(
            "Loaded %d translation(s) for group %s", len(self._rows), self.group_id
        )
        return self

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------
    def has(self, locale: str) -> bool:
        return locale in self.rows

    def get(self, locale: str, default=None):
        row = self.rows.get(locale)
        if row is None:
            return default
        return row.value

    def in_locale(self, locale: str, fallback: Optional[str] = None):
        """
        Value for `locale`. When that locale has no value (no row, or a
        NULL value) the value for `fallback` is returned instead.
        Returns None when neither locale has a value.
        """
        value = self.get(locale)
        if value is None and fallback is not None and fallback != locale:
            value = self.get(fallback)
        return value

    def locales(self) -> List[str]:
        return list(self.rows)

    def as_dict(self) -> Dict[str, Optional[str]]:
        return {locale: row.value for locale, row in self.rows.items()}

    def __contains__(self, locale) -> bool:
        return self.has(locale)

    def __iter__(self) -> Iterator[str]:
        return iter(self.locales())

    def __len__(self) -> int:
        return len(self.rows)

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------
    def set(self, locale: str, value) -> Translation:
        row, created = Translation.objects.update_or_create(
            group_id=self.group_id,
            locale=locale,
            defaults={"value": value},
        )
        if self._rows is not None:
            self._rows[locale] = row
        logger.info(
            "%s translation group %s [%s]",
            "Created" if created else "Updated",
            self.group_id,
            locale,
        )
        return row

    @transaction.atomic
    def set_many(self, values: Mapping[str, object]) -> None:
        for locale, value in values.items():
            self.set(locale, value)

    def delete(self, locale: Optional[str] = None) -> int:
        """
        Delete the value of one locale, or every value of the group when
        no locale is given. The TranslationGroup row itself is kept, so
        its id is never handed out to another record.
        Returns the number of deleted rows.
        """
        qs = Translation.objects.for_group(self.group_id)
        if locale is not None:
            qs = qs.for_locale(locale)
        deleted, _ = qs.delete()

        if self._rows is not None:
            if locale is None:
                self._rows = {}
            else:
                self._rows.pop(locale, None)

        logger.info(
            "Deleted %d translation(s) from group %s", deleted, self.group_id
        )
        return deleted
