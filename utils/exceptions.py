"""
业务异常

所有领域错误都继承自 DRF 的 APIException，由 utils.response.custom_exception_handler
统一包装为 {code, message, data} 格式返回。
"""
from rest_framework import exceptions, status
from rest_framework.exceptions import ValidationError  # noqa: F401


class DuplicateEmail(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = '该邮箱已注册'
    default_code = 'duplicate_email'


class InvalidCredentials(exceptions.APIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = '邮箱或密码错误'
    default_code = 'invalid_credentials'


class Unauthenticated(exceptions.NotAuthenticated):
    default_detail = '未登录或登录已过期'
    default_code = 'unauthenticated'


class Forbidden(exceptions.PermissionDenied):
    default_detail = '无权限执行该操作'
    default_code = 'forbidden'


class NotFound(exceptions.NotFound):
    default_detail = '资源不存在'
    default_code = 'not_found'


class InvalidTransition(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = '当前状态不允许该变更'
    default_code = 'invalid_transition'


class SlotUnavailable(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = '该时间段已被预约，请选择其他时间'
    default_code = 'slot_unavailable'
