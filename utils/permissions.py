"""
自定义权限类

角色能力统一登记在 CAPABILITIES 表中，视图通过 required_capability 声明所需能力，
不再在各个视图里分散判断 role。
"""
from rest_framework import permissions

from user.models import Role
from utils.exceptions import Unauthenticated


CAPABILITIES = {
    'book_appointment': {Role.PATIENT},
    'view_own_appointments': {Role.PATIENT, Role.DOCTOR, Role.ADMIN},
    'update_appointment_status': {Role.PATIENT, Role.DOCTOR, Role.ADMIN},
    'list_all_appointments': {Role.ADMIN},
    'manage_availability': {Role.DOCTOR},
    'manage_doctor_profile': {Role.DOCTOR},
    'review_doctors': {Role.ADMIN},
    'upload_documents': {Role.PATIENT, Role.DOCTOR, Role.ADMIN},
}

# 各角色可以把预约改成的目标状态
STATUS_RIGHTS = {
    Role.PATIENT: {'cancelled'},
    Role.DOCTOR: {'confirmed', 'cancelled', 'completed'},
    Role.ADMIN: {'confirmed', 'cancelled'},
}


def has_capability(user, capability):
    """查询能力表：角色是否具备某项能力"""
    return getattr(user, 'role', None) in CAPABILITIES.get(capability, set())


class HasCapability(permissions.BasePermission):
    """先认证、后鉴权：未登录返回 401，角色不符返回 403"""
    capability = None
    message = '当前角色无权执行该操作'
    code = 'forbidden'

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            raise Unauthenticated()
        capability = self.capability or getattr(view, 'required_capability', None)
        if capability is None:
            return True
        return has_capability(user, capability)


def capability_required(capability):
    """为单个 action 生成绑定了能力名的权限类"""
    return type(f'Can_{capability}', (HasCapability,), {'capability': capability})

