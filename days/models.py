# days/models.py
from django.db import models
from django.utils.translation import gettext_lazy as _

from translations.mixins import TranslatableMixin
from translations.models import TranslationGroupField


class Day(TranslatableMixin, models.Model):
    """
    Day of the week with a translatable `name`.
    """

    number = models.PositiveSmallIntegerField(
        unique=True,
        verbose_name=_("ISO weekday"),
        help_text=_("1 = Monday ... 7 = Sunday."),
    )

    # رقم مجموعة الترجمة لحقل `name`؛ القيم نفسها في translations.Translation
    _name = TranslationGroupField(verbose_name=_("name"))

    class Meta:
        verbose_name = _("day")
        verbose_name_plural = _("days")
        ordering = ("number",)

    def __str__(self) -> str:
        return self.name or f"Day {self.number}"
