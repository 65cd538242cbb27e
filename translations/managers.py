# translations/managers.py
from django.db import models


class TranslationGroupQuerySet(models.QuerySet):
    def allocate(self):
        """
        يحجز مجموعة ترجمة جديدة (صف جديد) ويرجعها.
        الرقم يأتي من الـ AutoField فلا يتكرر حتى لو حُذفت الترجمات.
        """
        return self.create()

    def empty(self):
        # مجموعات ما فيها ولا ترجمة
        return self.filter(translations__isnull=True)


class TranslationQuerySet(models.QuerySet):
    """
    QuerySet مخصص لـ Translation:
    فلاتر جاهزة حسب المجموعة واللغة.
    """

    def for_group(self, group_id):
        return self.filter(group_id=group_id)

    def for_locale(self, locale):
        return self.filter(locale=locale)

    def in_locales(self, locales):
        return self.filter(locale__in=list(locales))
