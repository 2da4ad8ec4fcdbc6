# hms/management/commands/ensure_admin.py
import os

from django.core.management.base import BaseCommand, CommandError
from django.db import IntegrityError, transaction

from hms.models import Role, User


class Command(BaseCommand):
    help = "Create the first ADMIN account, or reset its password (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--username", default=os.getenv("HMS_ADMIN_USERNAME", "admin"))
        parser.add_argument("--email", default=os.getenv("HMS_ADMIN_EMAIL", "admin@hospital.local"))
        parser.add_argument("--password", default=os.getenv("HMS_ADMIN_PASSWORD"))

    def handle(self, *args, **opts):
        password = opts["password"]
        if not password or len(password) < 8:
            raise CommandError("a password of at least 8 characters is required (--password or HMS_ADMIN_PASSWORD)")

        try:
            with transaction.atomic():
                u, created = User.objects.get_or_create(
                    username=opts["username"],
                    defaults={"email": opts["email"], "role": Role.ADMIN, "is_staff": True, "is_active": True},
                )
        except IntegrityError:
            raise CommandError(f"email {opts['email']} is already used by another account")
        if not created and u.role != Role.ADMIN:
            # 角色创建后不可修改
            raise CommandError(f"user {u.username} exists with role {u.role}")
        u.set_password(password)
        u.is_active = True
        u.save()
        self.stdout.write(self.style.SUCCESS(f"{'created' if created else 'updated'}: {u.username} (ADMIN)"))
