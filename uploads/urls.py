"""
文件上传URL配置
"""
from django.urls import path
from .views import FileUploadView

urlpatterns = [
    path('file/', FileUploadView.as_view(), name='file_upload'),
    # POST /upload/file/  - 上传文件（图片、PDF、Word 文档）
]
