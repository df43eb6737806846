"""Management command to submit paid orders that never reached Shopify."""

from django.core.management.base import BaseCommand

from verseandme.store.orders import pending_orders_to_retry, submit_pending_order


class Command(BaseCommand):
    help = "Create Shopify orders for pending or failed paid checkouts"

    def add_arguments(self, parser):
        parser.add_argument(
            "--limit",
            type=int,
            default=50,
            help="Maximum number of orders to submit in this run",
        )

    def handle(self, *args, **options):
        pending = list(pending_orders_to_retry()[: options["limit"]])
        if not pending:
            self.stdout.write("No pending orders.")
            return

        succeeded = 0
        for order in pending:
            if submit_pending_order(order):
                succeeded += 1
                self.stdout.write(self.style.SUCCESS(f"  Created: {order.payment_intent_id} -> {order.shopify_order_name}"))
            else:
                self.stdout.write(self.style.ERROR(f"  Failed: {order.payment_intent_id} ({order.last_error})"))

        self.stdout.write(f"\nSubmitted {succeeded} of {len(pending)} orders.")
