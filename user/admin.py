from django.contrib import admin
from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'email', 'role', 'is_active', 'created_at']
    list_filter = ['role', 'is_active', 'created_at']
    search_fields = ['name', 'email', 'phone']
    readonly_fields = ['role', 'password', 'created_at', 'updated_at', 'last_login']
    exclude = ['groups', 'user_permissions']
