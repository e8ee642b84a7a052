"""
医生模型
"""
from django.db import models
from user.models import User


class Weekday(models.TextChoices):
    MONDAY = 'Monday', '周一'
    TUESDAY = 'Tuesday', '周二'
    WEDNESDAY = 'Wednesday', '周三'
    THURSDAY = 'Thursday', '周四'
    FRIDAY = 'Friday', '周五'
    SATURDAY = 'Saturday', '周六'
    SUNDAY = 'Sunday', '周日'


class Doctor(models.Model):
    """医生档案，与医生角色用户一一对应"""
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='doctor_profile')
    specialization = models.CharField('专科', max_length=100)
    qualification = models.CharField('学历资质', max_length=100)
    experience = models.PositiveIntegerField('从业年限', default=0)
    consultation_fee = models.DecimalField('诊费', max_digits=10, decimal_places=2, default=500)
    hospital_name = models.CharField('医院名称', max_length=200, blank=True)
    hospital_address = models.CharField('医院地址', max_length=255, blank=True)
    rating = models.FloatField('评分', default=0.0)
    total_reviews = models.IntegerField('评价数量', default=0)
    # 审核：仅管理员可将 is_approved 由 False 改为 True，且只发生一次
    is_approved = models.BooleanField('是否审核通过', default=False)
    approved_at = models.DateTimeField('审核时间', blank=True, null=True)
    created_at = models.DateTimeField('创建时间', auto_now_add=True)
    updated_at = models.DateTimeField('更新时间', auto_now=True)

    class Meta:
        db_table = 'doctor'
        verbose_name = '医生'
        verbose_name_plural = '医生'
        ordering = ['-rating', '-total_reviews', 'id']

    def __str__(self):
        return f'{self.user.name} - {self.specialization}'


class AvailabilitySlot(models.Model):
    """医生每周固定出诊时段（周模板），每个星期几最多一条"""
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='available_slots')
    day = models.CharField('星期', max_length=10, choices=Weekday.choices)
    start_time = models.CharField('开始时间', max_length=5, help_text='格式：HH:mm，如 09:00')
    end_time = models.CharField('结束时间', max_length=5, help_text='格式：HH:mm，如 17:00')
    is_available = models.BooleanField('是否出诊', default=True)

    class Meta:
        db_table = 'doctor_availability'
        verbose_name = '出诊时段'
        verbose_name_plural = '出诊时段'
        constraints = [
            models.UniqueConstraint(fields=['doctor', 'day'], name='unique_doctor_weekday'),
        ]
        ordering = ['doctor', 'id']

    def __str__(self):
        return f'{self.doctor.user.name} {self.day} {self.start_time}-{self.end_time}'
