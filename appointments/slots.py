"""
号源计算

按医生的周模板生成当天全部 30 分钟号源，再扣除已被有效预约占用的时段。
"""
from datetime import datetime, timedelta

from doctors.services import WEEKDAYS, get_template_for_weekday
from .models import ACTIVE_STATUSES, Appointment

SLOT_MINUTES = 30
TIME_FORMAT = '%H:%M'


def weekday_name(day):
    """日期对应的星期名称（Monday ~ Sunday）"""
    return WEEKDAYS[day.weekday()]


def generate_slots(start_time, end_time, step=SLOT_MINUTES):
    """从 start_time 开始按 step 分钟生成号源标签，直到标签不早于 end_time"""
    current = datetime.strptime(start_time, TIME_FORMAT)
    end = datetime.strptime(end_time, TIME_FORMAT)
    delta = timedelta(minutes=step)
    while current < end:
        yield current.strftime(TIME_FORMAT)
        current += delta


def template_slots(doctor, day):
    """某天按周模板可出诊的全部号源；不出诊返回空列表"""
    entry = get_template_for_weekday(doctor, weekday_name(day))
    if entry is None or not entry.is_available:
        return []
    return list(generate_slots(entry.start_time, entry.end_time))


def booked_slots(doctor_user, day):
    """某医生某天已被有效预约占用的时段"""
    return set(
        Appointment.objects.filter(
            doctor=doctor_user,
            appointment_date=day,
            status__in=ACTIVE_STATUSES,
        ).values_list('time_slot', flat=True)
    )


def available_slots(doctor, day):
    """可预约号源，按时间升序"""
    candidates = template_slots(doctor, day)
    if not candidates:
        return []
    taken = booked_slots(doctor.user_id, day)
    return [slot for slot in candidates if slot not in taken]
