from django.urls import path
from .views import (
    CreateUser,
    UpdateRetrieveUser,
    Logout,
    LoginView,
    RefreshTokenView,
    VerifySession,
)

urlpatterns = [
    path('register/', CreateUser.as_view(), name='register'),           # 用户注册
    path('login/', LoginView.as_view(), name='login'),                  # 用户登录
    path('refresh/', RefreshTokenView.as_view(), name='refresh'),       # 刷新Token
    path('logout/', Logout.as_view(), name='logout'),                   # 用户登出
    path('verify/', VerifySession.as_view(), name='verify'),            # 校验登录状态
    path('me/', UpdateRetrieveUser.as_view(), name='me'),               # 获取/更新当前用户信息
]
