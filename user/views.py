from rest_framework import generics
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import RefreshToken, TokenError
from rest_framework_simplejwt.views import TokenRefreshView

from utils.response import success_response, error_response
from .serializers import (
    RegisterSerializer,
    UserLoginSerializer,
    UserLogOutSerializer,
    UserSerializer,
)
from .services import create_user, verify_credentials
from .tokens import issue_tokens


class CreateUser(generics.CreateAPIView):
    """
    用户注册接口
    注册成功即返回登录令牌；医生账号同时创建待审核的医生档案
    """
    serializer_class = RegisterSerializer
    permission_classes = [AllowAny]
    authentication_classes = []

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)

        # 验证数据，异常由全局异常处理返回
        serializer.is_valid(raise_exception=True)

        user_fields, doctor_profile = serializer.split()
        user = create_user(doctor_profile=doctor_profile, **user_fields)

        response_data = issue_tokens(user)
        response_data['user'] = UserSerializer(user).data

        return success_response(
            data=response_data,
            message='注册成功',
            code=201
        )


class LoginView(APIView):
    """
    用户登录接口
    邮箱不存在与密码错误返回相同的提示
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = UserLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = verify_credentials(
            serializer.validated_data['email'],
            serializer.validated_data['password'],
        )

        response_data = issue_tokens(user)
        response_data['user'] = UserSerializer(user).data

        return success_response(
            data=response_data,
            message='登录成功',
            code=200
        )


class RefreshTokenView(TokenRefreshView):
    """
    刷新Access Token并轮换Refresh Token
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        try:
            serializer.is_valid(raise_exception=True)
        except TokenError as e:
            # 过期、伪造或已拉黑的 Refresh Token 统一返回 401
            raise InvalidToken(e.args[0]) from e

        token_data = serializer.validated_data
        access_token = token_data.get('access')
        refresh_token = token_data.get('refresh') or request.data.get('refresh')

        response_data = {
            'token': access_token,
            'refresh_token': refresh_token,
            'expires_in': int(api_settings.ACCESS_TOKEN_LIFETIME.total_seconds()),
        }

        return success_response(
            data=response_data,
            message='刷新成功',
            code=200
        )


class VerifySession(APIView):
    """校验当前令牌并返回用户信息"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return success_response({'user': UserSerializer(request.user).data})


class UpdateRetrieveUser(generics.RetrieveUpdateAPIView):
    """An endpoint for updating and retrieving users"""
    permission_classes = [IsAuthenticated, ]
    serializer_class = UserSerializer

    def get_object(self):
        return self.request.user

    def retrieve(self, request, *args, **kwargs):
        return success_response(self.get_serializer(request.user).data)

    def update(self, request, *args, **kwargs):
        serializer = self.get_serializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return success_response(serializer.data, '更新成功', 200)


class Logout(APIView):
    """An endpoint to logout a user"""
    permission_classes = [IsAuthenticated, ]

    def post(self, request):
        serializer = UserLogOutSerializer(
            data=request.data, context={'access_token': request.auth})
        serializer.is_valid(raise_exception=True)
        refresh_token_string = serializer.validated_data['refresh']
        try:
            refresh_token = RefreshToken(refresh_token_string)
            refresh_token.blacklist()
        except TokenError as e:
            return error_response(
                message=f'退出失败: {str(e)}',
                code=400,
                data=None
            )
        return success_response(
            data=None,
            message='退出成功',
            code=200
        )
