"""
预约模型
"""
from django.db import models
from user.models import User


class AppointmentStatus(models.TextChoices):
    PENDING = 'pending', '待确认'
    CONFIRMED = 'confirmed', '已确认'
    CANCELLED = 'cancelled', '已取消'
    COMPLETED = 'completed', '已完成'


# 占用号源的状态；取消或完成后号源释放
ACTIVE_STATUSES = (AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED)


class Appointment(models.Model):
    """预约模型"""
    patient = models.ForeignKey(User, on_delete=models.CASCADE, related_name='patient_appointments')
    doctor = models.ForeignKey(User, on_delete=models.CASCADE, related_name='doctor_appointments')
    appointment_date = models.DateField('预约日期')
    time_slot = models.CharField('预约时段', max_length=5)  # HH:mm格式，30分钟号源的开始时间
    status = models.CharField('状态', max_length=20, choices=AppointmentStatus.choices,
                              default=AppointmentStatus.PENDING)
    symptoms = models.TextField('症状描述', blank=True)
    documents = models.JSONField('附件', default=list, blank=True)
    notes = models.TextField('医生备注', blank=True)
    # 有效预约为 True，取消/完成后置为 NULL；唯一索引中 NULL 互不冲突，
    # 因此同一医生同一时段只能存在一条有效预约
    active_slot = models.BooleanField('占用号源', null=True, default=True, editable=False)
    created_at = models.DateTimeField('创建时间', auto_now_add=True)
    updated_at = models.DateTimeField('更新时间', auto_now=True)

    class Meta:
        db_table = 'appointment'
        verbose_name = '预约'
        verbose_name_plural = '预约'
        ordering = ['-appointment_date', '-time_slot']
        constraints = [
            models.UniqueConstraint(
                fields=['doctor', 'appointment_date', 'time_slot', 'active_slot'],
                name='unique_active_booking',
            ),
        ]

    def __str__(self):
        return f'{self.patient.name} - {self.doctor.name} - {self.appointment_date} {self.time_slot}'

    @property
    def is_active(self):
        return self.status in ACTIVE_STATUSES

    def save(self, *args, **kwargs):
        self.active_slot = True if self.is_active else None
        update_fields = kwargs.get('update_fields')
        if update_fields is not None:
            kwargs['update_fields'] = set(update_fields) | {'active_slot', 'updated_at'}
        super().save(*args, **kwargs)
