from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from accounts.models import User
from core.models import Membership


class MembershipInline(admin.TabularInline):
    model = Membership
    extra = 0
    fields = ("organization", "role")
    autocomplete_fields = ("organization",)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    ordering = ("email",)
    list_display = ("email","is_staff","is_active","date_joined")
    fieldsets = (
        (None, {"fields": ("email","password")}),
        ("Datos personales", {"fields": ("first_name","last_name")}),
        ("Permisos", {"fields": ("is_active","is_staff","is_superuser","groups","user_permissions")}),
        ("Fechas", {"fields": ("last_login","date_joined")}),
    )
    add_fieldsets = ((None, {"fields": ("email","password1","password2")}),)
    search_fields = ("email","first_name","last_name")
    inlines = [MembershipInline]
