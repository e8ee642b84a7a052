"""
预约台账

预约的创建与状态变更只能经由本模块完成：
- book_appointment 在同一事务内完成"检查号源 + 写入"，并发抢号由唯一索引兜底；
- set_status 按状态机与角色权限表校验后更新状态。
"""
import logging

from django.db import IntegrityError, transaction

from doctors.services import get_approved_doctor_by_user
from user.models import Role
from utils.exceptions import Forbidden, InvalidTransition, NotFound, SlotUnavailable
from utils.permissions import STATUS_RIGHTS, has_capability
from .models import ACTIVE_STATUSES, Appointment, AppointmentStatus
from .slots import template_slots

booking_logger = logging.getLogger('booking_logger')

# 状态机：取消与完成为终态
TRANSITIONS = {
    AppointmentStatus.PENDING: {AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED},
    AppointmentStatus.CONFIRMED: {AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED},
    AppointmentStatus.CANCELLED: set(),
    AppointmentStatus.COMPLETED: set(),
}

APPOINTMENT_NOT_FOUND = '预约不存在'


def _with_parties(queryset):
    return queryset.select_related('patient', 'doctor')


def list_for_patient(patient):
    return _with_parties(Appointment.objects.filter(patient=patient)).order_by('-appointment_date', '-time_slot')


def list_for_doctor(doctor_user):
    return _with_parties(Appointment.objects.filter(doctor=doctor_user)).order_by('-appointment_date', '-time_slot')


def list_all():
    return _with_parties(Appointment.objects.all()).order_by('-appointment_date', '-time_slot')


def appointments_for(user):
    """按角色返回可见的预约：患者看自己的，医生看自己接诊的，管理员看全部"""
    if has_capability(user, 'list_all_appointments'):
        return list_all()
    if user.role == Role.DOCTOR:
        return list_for_doctor(user)
    return list_for_patient(user)


def get_appointment_for(user, pk):
    """预约详情：仅预约双方与管理员可查看"""
    try:
        appointment = _with_parties(Appointment.objects).get(pk=pk)
    except (Appointment.DoesNotExist, ValueError, TypeError):
        raise NotFound(APPOINTMENT_NOT_FOUND)
    if user.role != Role.ADMIN and user.id not in (appointment.patient_id, appointment.doctor_id):
        raise Forbidden('无权限查看该预约')
    return appointment


def book_appointment(patient, doctor_user_id, appointment_date, time_slot, symptoms='', documents=()):
    """
    创建预约（唯一的写入入口）

    号源必须属于医生当天的周模板，并且当前没有有效预约占用。
    检查与写入在同一事务中；两个并发请求都通过检查时，后提交的一方会触发
    unique_active_booking 唯一索引冲突，统一转换为 SlotUnavailable。
    """
    doctor = get_approved_doctor_by_user(doctor_user_id)

    if time_slot not in template_slots(doctor, appointment_date):
        raise SlotUnavailable('该医生当天没有这个时段的号源')

    try:
        with transaction.atomic():
            taken = Appointment.objects.filter(
                doctor_id=doctor.user_id,
                appointment_date=appointment_date,
                time_slot=time_slot,
                status__in=ACTIVE_STATUSES,
            ).exists()
            if taken:
                raise SlotUnavailable()
            appointment = Appointment.objects.create(
                patient=patient,
                doctor_id=doctor.user_id,
                appointment_date=appointment_date,
                time_slot=time_slot,
                symptoms=symptoms or '',
                documents=list(documents),
                status=AppointmentStatus.PENDING,
            )
    except IntegrityError:
        booking_logger.warning(
            f"Booking race lost: doctor={doctor.user_id} date={appointment_date} slot={time_slot} "
            f"patient={patient.id}"
        )
        raise SlotUnavailable()

    booking_logger.info(
        f"Appointment {appointment.id} booked: doctor={doctor.user_id} date={appointment_date} "
        f"slot={time_slot} patient={patient.id}"
    )
    return appointment


def authorize_status_change(appointment, new_status, actor):
    """
    校验状态变更，顺序为：
    预约归属 -> 终态不可变更 -> 角色可设置的目标状态 -> 状态机 -> 患者仅能取消待确认的预约
    """
    role = actor.role
    if role == Role.DOCTOR and appointment.doctor_id != actor.id:
        raise Forbidden('无权限操作该预约')
    if role == Role.PATIENT and appointment.patient_id != actor.id:
        raise Forbidden('只能操作自己的预约')
    if not TRANSITIONS[appointment.status]:
        raise InvalidTransition(f'预约已{appointment.get_status_display()}，不能再变更状态')
    if new_status not in STATUS_RIGHTS.get(role, set()):
        raise Forbidden('当前角色不能将预约设置为该状态')

    if new_status not in TRANSITIONS[appointment.status]:
        raise InvalidTransition(
            f'预约状态为{appointment.get_status_display()}，不能变更为{AppointmentStatus(new_status).label}'
        )

    if role == Role.PATIENT and appointment.status != AppointmentStatus.PENDING:
        raise Forbidden('已确认的预约请联系医生取消')


def set_status(appointment_id, new_status, actor, notes=None):
    """变更预约状态；取消或完成后号源自动释放"""
    with transaction.atomic():
        try:
            appointment = Appointment.objects.select_for_update().get(pk=appointment_id)
        except (Appointment.DoesNotExist, ValueError, TypeError):
            raise NotFound(APPOINTMENT_NOT_FOUND)

        authorize_status_change(appointment, new_status, actor)

        previous = appointment.status
        appointment.status = new_status
        update_fields = ['status']
        if notes is not None and actor.role == Role.DOCTOR:
            appointment.notes = notes
            update_fields.append('notes')
        appointment.save(update_fields=update_fields)

    booking_logger.info(
        f"Appointment {appointment.id} status {previous} -> {new_status} by {actor.role} {actor.id}"
    )
    return appointment
