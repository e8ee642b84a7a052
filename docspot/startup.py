"""
启动检查：数据库不可达时直接退出进程，不进入降级模式
"""
import logging
import sys

from django.db import connections
from django.db.utils import OperationalError

logger = logging.getLogger(__name__)


def ensure_database(alias='default'):
    """确认数据库可连接，否则记录错误并以非零状态码退出"""
    try:
        connections[alias].ensure_connection()
    except OperationalError as e:
        logger.critical(f"数据库连接失败，服务终止: {e}")
        sys.exit(1)
    logger.info(f"数据库连接正常 ({alias})")
