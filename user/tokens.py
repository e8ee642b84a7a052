"""
JWT 令牌签发：在标准载荷之外携带 role 声明
"""
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import RefreshToken


class RoleRefreshToken(RefreshToken):
    """携带用户角色的 Refresh Token，派生的 Access Token 会复制该声明"""

    @classmethod
    def for_user(cls, user):
        token = super().for_user(user)
        token['role'] = user.role
        return token


def issue_tokens(user):
    """签发一对令牌，返回符合接口文档的字典"""
    refresh = RoleRefreshToken.for_user(user)
    return {
        'token': str(refresh.access_token),
        'refresh_token': str(refresh),
        'expires_in': int(api_settings.ACCESS_TOKEN_LIFETIME.total_seconds()),
    }
