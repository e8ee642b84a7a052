from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from decouple import config

from docspot.startup import ensure_database
from user.models import Role


class Command(BaseCommand):
    help = 'Create a single default admin if none exists (idempotent).'

    def handle(self, *args, **options):
        ensure_database()
        User = get_user_model()
        # Check if an admin exists
        if User.objects.filter(role=Role.ADMIN).exists():
            self.stdout.write(self.style.WARNING('Admin already exists. No action taken.'))
            return
        # 从 .env 读取，密码必须显式配置
        email = config('ADMIN_EMAIL', default='admin@docspot.com')
        password = config('ADMIN_PASSWORD')
        name = config('ADMIN_NAME', default='Admin')
        user = User.objects.create_superuser(email=email, password=password, name=name)
        self.stdout.write(self.style.SUCCESS(f'Created admin: {user.email}'))
