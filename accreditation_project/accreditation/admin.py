from django.contrib import admin

from .models import Program, Standard, Criterion, Assignment


@admin.register(Program)
class ProgramAdmin(admin.ModelAdmin):
    list_display = ("name", "unit")
    search_fields = ("name",)


@admin.register(Standard)
class StandardAdmin(admin.ModelAdmin):
    list_display = ("name", "program")
    search_fields = ("name",)


@admin.register(Criterion)
class CriterionAdmin(admin.ModelAdmin):
    list_display = ("name", "standard")
    search_fields = ("name",)


@admin.register(Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "criterion",
        "assessor",
        "unit",
        "deadline",
        "status",
        "unassigned_at",
    )

    list_filter = (
        "status",
        "deadline",
    )

    search_fields = (
        "criterion__name",
        "assessor__username",
        "unit__name",
    )

    list_select_related = ("criterion", "assessor", "unit")
    ordering = ("deadline",)
