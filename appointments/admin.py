from django.contrib import admin
from .models import Appointment


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ['id', 'patient', 'doctor', 'appointment_date', 'time_slot', 'status', 'created_at']
    list_filter = ['status', 'appointment_date', 'created_at']
    search_fields = ['patient__name', 'doctor__name', 'symptoms']
    # 状态只能通过预约服务变更
    readonly_fields = ['status', 'created_at', 'updated_at']
