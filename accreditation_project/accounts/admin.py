from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import Role, Unit, User, UnitMembership


# ============================================================
# USER ADMIN
# ============================================================

@admin.register(User)
class UserAdmin(BaseUserAdmin):
    ordering = ("username",)

    list_display = (
        "username",
        "email",
        "first_name",
        "last_name",
        "unit",
        "phone_number",
        "is_active",
        "is_staff",
    )

    list_filter = (
        "unit",
        "is_active",
        "is_staff",
    )

    search_fields = (
        "username",
        "email",
        "first_name",
        "last_name",
        "phone_number",
    )

    fieldsets = BaseUserAdmin.fieldsets + (
        ("Unit & Contact", {
            "fields": ("unit", "phone_number"),
        }),
    )


# ============================================================
# MEMBERSHIP INLINE
# ============================================================

class UnitMembershipInline(admin.TabularInline):
    model = UnitMembership
    extra = 0
    autocomplete_fields = ("user",)


# ============================================================
# UNIT ADMIN
# ============================================================

@admin.register(Unit)
class UnitAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "unit_type", "parent", "is_active")
    list_filter = ("unit_type", "is_active")
    search_fields = ("name", "code")
    inlines = (UnitMembershipInline,)


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ("name", "display_name")
    search_fields = ("name", "display_name")
