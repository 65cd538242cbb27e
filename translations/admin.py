from django.contrib import admin

from translations.models import Translation, TranslationGroup


class TranslationInline(admin.TabularInline):
    model = Translation
    extra = 0


@admin.register(TranslationGroup)
class TranslationGroupAdmin(admin.ModelAdmin):
    list_display = ("id", "created_at")
    inlines = [TranslationInline]


@admin.register(Translation)
class TranslationAdmin(admin.ModelAdmin):
    list_display = ("group", "locale", "value")
    list_filter = ("locale",)
    search_fields = ("value",)
    ordering = ("group", "locale")
