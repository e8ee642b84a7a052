from rest_framework import serializers
from django.contrib.auth import get_user_model
from rest_framework_simplejwt.tokens import RefreshToken, TokenError

from .models import Role


class UserSerializer(serializers.ModelSerializer):
    """用户序列化器（不包含密码哈希）"""

    class Meta:
        model = get_user_model()
        fields = ['id', 'name', 'email', 'role', 'phone', 'address', 'gender', 'date_of_birth',
                  'created_at', 'updated_at']
        # 角色与邮箱注册后不可通过接口修改
        read_only_fields = ['id', 'email', 'role', 'created_at', 'updated_at']


class UserBriefSerializer(serializers.ModelSerializer):
    """关联用户的只读投影（预约列表中展示对方信息）"""

    class Meta:
        model = get_user_model()
        fields = ['id', 'name', 'email', 'phone']
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    """用户注册序列化器"""
    name = serializers.CharField(max_length=50)
    email = serializers.EmailField(max_length=254)
    password = serializers.CharField(
        write_only=True,
        max_length=100,
        min_length=6,
        help_text='密码（至少6位）'
    )
    role = serializers.ChoiceField(choices=[Role.PATIENT, Role.DOCTOR], default=Role.PATIENT)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    gender = serializers.ChoiceField(choices=['male', 'female', 'other'], required=False, allow_blank=True)
    date_of_birth = serializers.DateField(required=False, allow_null=True)

    # 医生注册时可选填写的职业信息
    specialization = serializers.CharField(max_length=100, required=False, allow_blank=True)
    qualification = serializers.CharField(max_length=100, required=False, allow_blank=True)
    experience = serializers.IntegerField(min_value=0, required=False)
    consultation_fee = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False)
    hospital_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    hospital_address = serializers.CharField(max_length=255, required=False, allow_blank=True)

    DOCTOR_FIELDS = ('specialization', 'qualification', 'experience', 'consultation_fee',
                     'hospital_name', 'hospital_address')

    def split(self):
        """拆分为用户字段与医生档案字段"""
        data = dict(self.validated_data)
        doctor_profile = {field: data.pop(field) for field in self.DOCTOR_FIELDS if field in data}
        return data, doctor_profile


class UserLoginSerializer(serializers.Serializer):
    """用户登录序列化器"""
    email = serializers.EmailField(required=True, help_text='邮箱')
    password = serializers.CharField(required=True, write_only=True, help_text='密码')


class UserLogOutSerializer(serializers.Serializer):
    "A serializer for validate data for Logging out user"
    refresh = serializers.CharField(required=True,
                                    write_only=True, trim_whitespace=True)

    def validate_refresh(self, value):
        """Validate the refresh token"""
        access_token = self.context.get('access_token')

        if not access_token:
            raise serializers.ValidationError("Something wrong in the access token")

        access_user_id = access_token.payload.get('user_id')
        if access_user_id is None:
            raise serializers.ValidationError("User ID is missing in the access token.")

        try:
            refresh_token = RefreshToken(value)
            refresh_user_id = refresh_token.payload.get('user_id')
        except TokenError:
            raise serializers.ValidationError("Invalid or expired refresh token.")

        # Check if the user ID in the access token matches the refresh token
        if str(access_user_id) != str(refresh_user_id):
            raise serializers.ValidationError(
                "The refresh token does not belong " +
                "to the same user as the access token.")

        return value
