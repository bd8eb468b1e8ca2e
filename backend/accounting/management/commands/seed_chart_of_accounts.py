# accounting/management/commands/seed_chart_of_accounts.py

from django.core.management.base import BaseCommand

from accounting.commands import seed_chart_of_accounts


class Command(BaseCommand):
    help = "Install the default system chart of accounts"

    def handle(self, *args, **options):
        result = seed_chart_of_accounts()
        created = result.data
        for account in created:
            self.stdout.write(f"  {account}")
        self.stdout.write(self.style.SUCCESS(f"Done! Created {len(created)} accounts."))
