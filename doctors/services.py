"""
医生相关业务：周模板维护与入驻审核
"""
import logging
import re

from django.db import transaction
from django.db.models import Q
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from utils.exceptions import NotFound
from .models import AvailabilitySlot, Doctor, Weekday

audit_logger = logging.getLogger('audit_logger')

TIME_LABEL_RE = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')
WEEKDAYS = [choice.value for choice in Weekday]

DOCTOR_NOT_FOUND = '医生不存在'


def validate_template_entries(entries):
    """校验周模板：星期取值合法、时间为 HH:mm、开始早于结束、同一天不重复"""
    seen = set()
    errors = {}
    for index, entry in enumerate(entries):
        day = entry.get('day')
        start, end = entry.get('start_time'), entry.get('end_time')
        if day not in WEEKDAYS:
            errors[index] = f'星期取值无效: {day}'
        elif day in seen:
            errors[index] = f'{day} 重复设置'
        elif not (isinstance(start, str) and TIME_LABEL_RE.match(start)) or \
                not (isinstance(end, str) and TIME_LABEL_RE.match(end)):
            errors[index] = '时间格式错误，应为 HH:mm 格式'
        elif start >= end:
            errors[index] = '开始时间必须早于结束时间'
        seen.add(day)
    if errors:
        raise ValidationError({'available_slots': errors})


def set_template(doctor, entries):
    """整体替换医生的周模板"""
    validate_template_entries(entries)
    ordered = sorted(entries, key=lambda e: WEEKDAYS.index(e['day']))
    with transaction.atomic():
        AvailabilitySlot.objects.filter(doctor=doctor).delete()
        AvailabilitySlot.objects.bulk_create([
            AvailabilitySlot(
                doctor=doctor,
                day=entry['day'],
                start_time=entry['start_time'],
                end_time=entry['end_time'],
                is_available=entry.get('is_available', True),
            )
            for entry in ordered
        ])
    return list(doctor.available_slots.all())


def get_template_for_weekday(doctor, weekday):
    """返回某个星期几的模板条目，没有则返回 None（当天不出诊）"""
    return AvailabilitySlot.objects.filter(doctor=doctor, day=weekday).first()


def approved_doctors(specialization=None, search=None):
    """公开医生列表：仅包含审核通过的医生"""
    qs = Doctor.objects.filter(is_approved=True).select_related('user').prefetch_related('available_slots')
    if specialization:
        qs = qs.filter(specialization__iexact=specialization)
    if search:
        qs = qs.filter(
            Q(user__name__icontains=search)
            | Q(specialization__icontains=search)
            | Q(hospital_name__icontains=search)
        )
    return qs


def pending_doctors():
    return Doctor.objects.filter(is_approved=False).select_related('user').order_by('created_at')


def get_approved_doctor(pk):
    """按档案ID获取已审核医生，未审核视为不存在"""
    try:
        return Doctor.objects.select_related('user').get(pk=pk, is_approved=True)
    except Doctor.DoesNotExist:
        raise NotFound(DOCTOR_NOT_FOUND)


def get_approved_doctor_by_user(user_id):
    """按医生的用户ID获取已审核医生档案"""
    try:
        return Doctor.objects.select_related('user').get(user_id=user_id, is_approved=True)
    except (Doctor.DoesNotExist, ValueError, TypeError):
        raise NotFound(DOCTOR_NOT_FOUND)


def approve_doctor(pk, actor=None):
    """审核通过：is_approved 只会由 False 变为 True 一次"""
    with transaction.atomic():
        try:
            doctor = Doctor.objects.select_for_update().select_related('user').get(pk=pk)
        except Doctor.DoesNotExist:
            raise NotFound(DOCTOR_NOT_FOUND)
        if doctor.is_approved:
            return doctor, False
        doctor.is_approved = True
        doctor.approved_at = timezone.now()
        doctor.save(update_fields=['is_approved', 'approved_at', 'updated_at'])
    audit_logger.info(
        f"Doctor {doctor.pk} ({doctor.user.email}) approved by "
        f"{getattr(actor, 'email', 'system')}"
    )
    return doctor, True
