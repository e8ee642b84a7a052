from django.db import models
from django.contrib.auth.models import (
    AbstractBaseUser,
    BaseUserManager,
    PermissionsMixin
)


class Role(models.TextChoices):
    """用户角色，注册时确定，之后不可更改"""
    PATIENT = 'patient', '患者'
    DOCTOR = 'doctor', '医生'
    ADMIN = 'admin', '管理员'


class UserManager(BaseUserManager):
    """用户管理器"""
    def create_user(self, email, password=None, **extra_fields):
        """创建普通用户"""
        if not email:
            raise ValueError('邮箱是必填项')
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """创建超级管理员"""
        extra_fields.setdefault('role', Role.ADMIN)
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """用户模型"""
    GENDER_CHOICES = [
        ('male', '男'),
        ('female', '女'),
        ('other', '其他'),
    ]

    email = models.EmailField('邮箱', max_length=254, unique=True)
    name = models.CharField('姓名', max_length=50)
    role = models.CharField('角色', max_length=10, choices=Role.choices, default=Role.PATIENT)
    phone = models.CharField('手机号', max_length=20, blank=True)
    address = models.CharField('地址', max_length=255, blank=True)
    gender = models.CharField('性别', max_length=10, choices=GENDER_CHOICES, blank=True)
    date_of_birth = models.DateField('出生日期', blank=True, null=True)
    created_at = models.DateTimeField('创建时间', auto_now_add=True)
    updated_at = models.DateTimeField('更新时间', auto_now=True)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    is_superuser = models.BooleanField(default=False)

    objects = UserManager()
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        db_table = 'user'
        verbose_name = '用户'
        verbose_name_plural = '用户'

    def __str__(self):
        return f'{self.name}({self.email})'

    @property
    def is_patient(self):
        return self.role == Role.PATIENT

    @property
    def is_doctor(self):
        return self.role == Role.DOCTOR

    @property
    def is_admin(self):
        return self.role == Role.ADMIN
