"""
统一响应格式工具
"""
import logging

from rest_framework.response import Response
from rest_framework import status
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def success_response(data=None, message='success', code=200):
    """成功响应"""
    return Response({
        'code': code,
        'message': message,
        'data': data
    }, status=code)


def error_response(message='error', code=400, data=None):
    """错误响应：HTTP 状态码与 code 保持一致"""
    return Response({
        'code': code,
        'message': message,
        'data': data
    }, status=code)


def _first_message(detail):
    """从 DRF 的错误详情中提取第一条可读信息"""
    if isinstance(detail, dict):
        if not detail:
            return ''
        return _first_message(next(iter(detail.values())))
    if isinstance(detail, list):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


def custom_exception_handler(exc, context):
    """自定义异常处理器"""
    response = exception_handler(exc, context)

    if response is None:
        # 未处理的异常（数据库故障等）统一返回 500
        view = context.get('view')
        logger.exception(f"未处理的异常 ({view.__class__.__name__ if view else 'unknown'}): {exc}")
        return Response({
            'code': status.HTTP_500_INTERNAL_SERVER_ERROR,
            'message': '服务器内部错误',
            'data': None
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    detail = getattr(exc, 'detail', None)
    codes = exc.get_codes() if hasattr(exc, 'get_codes') else None
    response.data = {
        'code': response.status_code,
        'message': _first_message(detail) if detail is not None else str(exc),
        'data': detail if isinstance(detail, (dict, list)) else None,
        'error': codes if isinstance(codes, str) else getattr(exc, 'default_code', None),
    }
    return response
