from django.contrib import admin

from days.models import Day


@admin.register(Day)
class DayAdmin(admin.ModelAdmin):
    list_display = ("number", "__str__", "_name")
    ordering = ("number",)
