from django.core.management.base import BaseCommand, CommandError

from clinic.exceptions import ConflictError
from clinic.models import User
from clinic.services.users import ensure_user


class Command(BaseCommand):
    help = "Create or update the staff record for an identity-provider subject (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument('--id', required=True, help='Subject id issued by the identity provider')
        parser.add_argument('--email', required=True)
        parser.add_argument('--first-name', required=True)
        parser.add_argument('--last-name', required=True)
        parser.add_argument('--role', required=True, choices=[r for r, _ in User.ROLE_CHOICES])

    def handle(self, *args, **opts):
        try:
            user, created = ensure_user(
                id=opts['id'],
                email=opts['email'],
                first_name=opts['first_name'],
                last_name=opts['last_name'],
                role=opts['role'],
            )
        except ConflictError as exc:
            raise CommandError(str(exc.detail)) from exc
        verb = 'created' if created else 'updated'
        self.stdout.write(self.style.SUCCESS(f"{verb}: {user.id} <{user.email}> ({user.role})"))
