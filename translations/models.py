# translations/models.py
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .managers import TranslationGroupQuerySet, TranslationQuerySet


class TranslationGroupField(models.PositiveIntegerField):
    """
    Holds the translation group id of one translatable field.

    Declaring `_name = TranslationGroupField()` on a model using
    TranslatableMixin makes `name` a translatable field whose values
    live in the Translation table.
    """

    description = _("Translation group id")

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("null", True)
        kwargs.setdefault("blank", True)
        kwargs.setdefault("editable", False)
        kwargs.setdefault("db_index", True)
        super().__init__(*args, **kwargs)


class TranslationGroup(models.Model):
    """
    One translatable field of one record.
    Its id is what the record stores in its `_<field>` column.
    """

    created_at = models.DateTimeField(
        default=timezone.now,
        editable=False,
        verbose_name=_("created at"),
    )

    objects = TranslationGroupQuerySet.as_manager()

    class Meta:
        verbose_name = _("translation group")
        verbose_name_plural = _("translation groups")
        ordering = ("id",)

    def __str__(self) -> str:
        return f"#{self.pk}"


class Translation(models.Model):
    """
    One value of one translatable field in one locale.
    All locales of the same field instance share a group.
    """

    group = models.ForeignKey(
        TranslationGroup,
        on_delete=models.CASCADE,
        related_name="translations",
        verbose_name=_("group"),
    )
    locale = models.CharField(
        max_length=15,
        verbose_name=_("locale"),
    )
    value = models.TextField(
        null=True,
        blank=True,
        verbose_name=_("value"),
    )

    objects = TranslationQuerySet.as_manager()

    class Meta:
        verbose_name = _("translation")
        verbose_name_plural = _("translations")
        ordering = ("group_id", "locale")
        constraints = [
            models.UniqueConstraint(
                fields=["group", "locale"],
                name="translations_unique_group_locale",
            ),
        ]

    def __str__(self) -> str:
        return f"#{self.group_id} [{self.locale}] {self.value or ''}"
