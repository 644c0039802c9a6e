# ho_core/officers/management/commands/sync_officers.py
from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from ho_core.officers.storage import get_record_store


class Command(BaseCommand):
    help = (
        "Push the local officer cache into the remote store "
        "(delete-all-then-bulk-insert). Use after an outage to resync."
    )

    def add_arguments(self, parser):
        parser.add_argument("--dry-run", action="store_true", help="Print counts only; do not write.")

    def handle(self, *args, **opts):
        store = get_record_store()
        local_count = len(store.local.read())

        if opts["dry_run"]:
            self.stdout.write(f"Local officer records: {local_count}")
            self.stdout.write("DRY RUN: remote store not modified")
            return

        if local_count == 0:
            # An empty push would wipe the remote table.
            raise CommandError("Local officer cache is empty; refusing to clear the remote store.")

        result = store.push_local_to_remote()
        if not result.ok:
            raise CommandError(f"Remote store rejected the sync: {result.error}")

        self.stdout.write(f"Officer records pushed to remote store: {result.value}")
