"""
预约附件存储

只做校验与落盘，返回存储路径；业务层原样保存这些路径，不读取文件内容。
"""
import os
import uuid

from django.conf import settings
from django.core.files.storage import default_storage
from django.utils import timezone
from rest_framework.exceptions import ValidationError

# 扩展名与允许的内容类型需同时匹配
ALLOWED_TYPES = {
    '.jpg': {'image/jpeg'},
    '.jpeg': {'image/jpeg'},
    '.png': {'image/png'},
    '.gif': {'image/gif'},
    '.pdf': {'application/pdf'},
    '.doc': {'application/msword'},
    '.docx': {'application/vnd.openxmlformats-officedocument.wordprocessingml.document'},
}


def validate_documents(files):
    """校验数量、大小与类型，任一不合法即整体拒绝"""
    max_count = settings.MAX_APPOINTMENT_DOCUMENTS
    max_size = settings.MAX_DOCUMENT_SIZE
    if len(files) > max_count:
        raise ValidationError({'documents': f'最多上传{max_count}个文件'})
    for file_obj in files:
        ext = os.path.splitext(file_obj.name or '')[1].lower()
        allowed = ALLOWED_TYPES.get(ext)
        if not allowed or file_obj.content_type not in allowed:
            raise ValidationError({'documents': f'不支持的文件类型: {file_obj.name}，仅支持图片、PDF与Word文档'})
        if file_obj.size > max_size:
            raise ValidationError({'documents': f'文件过大: {file_obj.name}，最大{max_size // (1024 * 1024)}MB'})


def save_documents(files, purpose='documents'):
    """保存文件到 media/uploads/{purpose}/YYYY/MM/uuid.ext，返回存储路径列表"""
    validate_documents(files)
    today = timezone.now()
    saved = []
    for file_obj in files:
        ext = os.path.splitext(file_obj.name)[1].lower()
        filename = f"{uuid.uuid4().hex}{ext}"
        relative_path = '/'.join(['uploads', purpose, today.strftime('%Y'), today.strftime('%m'), filename])
        saved.append(default_storage.save(relative_path, file_obj))
    return saved


def delete_documents(paths):
    """删除已保存的文件（预约失败时回收）"""
    for path in paths:
        if default_storage.exists(path):
            default_storage.delete(path)
