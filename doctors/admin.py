from django.contrib import admin
from .models import AvailabilitySlot, Doctor


class AvailabilitySlotInline(admin.TabularInline):
    model = AvailabilitySlot
    extra = 0


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'specialization', 'hospital_name', 'is_approved', 'created_at']
    list_filter = ['specialization', 'is_approved', 'created_at']
    search_fields = ['user__name', 'specialization', 'hospital_name']
    # 审核只能走审核接口
    readonly_fields = ['is_approved', 'approved_at', 'created_at', 'updated_at']
    inlines = [AvailabilitySlotInline]
