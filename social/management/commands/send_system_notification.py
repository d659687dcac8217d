"""Management command broadcasting a system announcement."""

import json
from uuid import UUID

from django.core.management.base import BaseCommand, CommandError

from social.models import Profile
from social.services.notification_fanout_service import notification_fanout_service


class Command(BaseCommand):
    """Send a system notification to selected profiles or to everyone."""

    help = "Send a system announcement to profiles"

    def add_arguments(self, parser):
        """Register command line options."""
        parser.add_argument("title", help="Announcement headline")
        parser.add_argument("--message", default=None, help="Announcement body")
        parser.add_argument(
            "--profile",
            action="append",
            dest="profile_ids",
            default=[],
            help="Recipient profile id; repeat for several. Omit to notify all.",
        )
        parser.add_argument(
            "--metadata",
            default=None,
            help="JSON object attached to each notification",
        )

    def handle(self, *args, **options):
        """Resolve recipients and send the announcement."""
        metadata = None
        if options["metadata"]:
            try:
                metadata = json.loads(options["metadata"])
            except json.JSONDecodeError as e:
                raise CommandError(f"--metadata is not valid JSON: {e}") from e
            if not isinstance(metadata, dict):
                raise CommandError("--metadata must be a JSON object")

        try:
            profile_ids = [UUID(value) for value in options["profile_ids"]]
        except ValueError as e:
            raise CommandError(f"Invalid profile id: {e}") from e

        recipients = Profile.objects.all()
        if profile_ids:
            recipients = recipients.filter(id__in=profile_ids)
        recipient_ids = list(recipients.values_list("id", flat=True))

        if not recipient_ids:
            raise CommandError("No matching profiles to notify")

        sent = notification_fanout_service.send_system_notification(
            recipient_ids,
            title=options["title"],
            message=options["message"],
            metadata=metadata,
        )
        self.stdout.write(
            self.style.SUCCESS(
                f"Sent {sent} of {len(recipient_ids)} system notifications"
            )
        )
