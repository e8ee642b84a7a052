"""
身份存储：注册、凭证校验与用户查询
"""
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from doctors.models import Doctor
from utils.exceptions import DuplicateEmail, InvalidCredentials, NotFound
from .models import Role

# 医生注册时未填写的职业信息默认值
DOCTOR_PROFILE_DEFAULTS = {
    'specialization': 'General Medicine',
    'qualification': 'MBBS',
    'experience': 0,
    'consultation_fee': 500,
    'hospital_name': '',
    'hospital_address': '',
}


def create_user(name, email, password, role=Role.PATIENT, doctor_profile=None, **profile):
    """
    创建用户；角色为医生时同时创建待审核的医生档案。

    邮箱按原样精确比较，重复时抛出 DuplicateEmail（并发重复由唯一索引兜底）。
    """
    user_model = get_user_model()
    if user_model.objects.filter(email=email).exists():
        raise DuplicateEmail()

    try:
        with transaction.atomic():
            user = user_model.objects.create_user(
                email=email, password=password, name=name, role=role, **profile
            )
            if role == Role.DOCTOR:
                fields = dict(DOCTOR_PROFILE_DEFAULTS)
                fields.update({k: v for k, v in (doctor_profile or {}).items() if v not in (None, '')})
                Doctor.objects.create(user=user, **fields)
    except IntegrityError:
        raise DuplicateEmail()
    return user


def verify_credentials(email, password):
    """校验邮箱与密码；邮箱不存在与密码错误返回同一错误"""
    user_model = get_user_model()
    user = user_model.objects.filter(email=email).first()
    if user is None:
        # 与存在用户时的哈希耗时保持一致
        user_model().set_password(password)
        raise InvalidCredentials()
    if not user.check_password(password) or not user.is_active:
        raise InvalidCredentials()
    return user


def lookup_user(user_id):
    try:
        return get_user_model().objects.get(pk=user_id)
    except (get_user_model().DoesNotExist, ValueError, TypeError):
        raise NotFound('用户不存在')
