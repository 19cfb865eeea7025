"""Payment acknowledgment for confirmed bookings."""

from decimal import Decimal
import logging

logger = logging.getLogger(__name__)


def process_payment(amount: Decimal) -> None:
    logger.info(f"Payment of Rs.{amount} processed successfully.")
