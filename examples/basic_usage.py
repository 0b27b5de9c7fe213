"""
Basic usage example for the Magpie SDK.

This example demonstrates the fundamental operations:
- Checking connectivity
- Creating a customer
- Charging a source with an idempotency key
- Handling typed errors
- Verifying a webhook locally
"""

import json
import os

from magpie_sdk import (
    MagpieClient,
    MagpieConfig,
    MagpieError,
    RateLimitError,
    ValidationError,
    WebhookError,
)


def main() -> None:
    """Run basic usage example."""
    secret_key = os.environ.get("MAGPIE_SECRET_KEY", "sk_test_replace_me")
    config = MagpieConfig(timeout=10, max_retries=2)

    with MagpieClient(secret_key, config) as magpie:
        print("=== Magpie SDK Basic Usage Example ===\n")

        # 1. Connectivity
        print("1. Pinging API...")
        print(f"  Healthy: {magpie.ping()}\n")

        # 2. Create a customer
        print("2. Creating customer...")
        try:
            customer = magpie.customers.create(
                {"email": "demo@example.com", "description": "Demo customer"}
            )
            print(f"  Customer ID: {customer.id}\n")
        except ValidationError as e:
            print(f"  Invalid customer: {e.message} {e.errors}\n")
            return
        except MagpieError as e:
            print(f"  Failed: {e.type} {e.message} (request {e.request_id})\n")
            return

        # 3. Charge a source; the idempotency key makes server errors retryable
        print("3. Creating charge...")
        try:
            charge = magpie.charges.create(
                {
                    "amount": 10000,
                    "currency": "php",
                    "source": "src_replace_me",
                    "description": "Order #1234",
                    "statement_descriptor": "DEMOSHOP",
                },
                {"idempotency_key": "order-1234"},
            )
            print(f"  Charge {charge.id}: {charge.status}\n")
        except RateLimitError:
            print("  Rate limited, try again later\n")
        except MagpieError as e:
            print(f"  Failed: {e.user_message()}\n")

    # 4. Webhooks are verified locally
    print("4. Verifying webhook...")
    webhook_secret = "whsec_demo"
    payload = json.dumps(
        {"id": "evt_1", "type": "charge.succeeded", "data": {}, "created": 0}
    )
    verifier = magpie.webhooks.verifier
    header = verifier.generate_test_signature(payload, webhook_secret)
    try:
        event = verifier.construct_event(payload, header, webhook_secret)
        print(f"  Event {event.id}: {event.type}")
    except WebhookError as e:
        print(f"  Rejected: {e.message}")


if __name__ == "__main__":
    main()
