"""Mock payment gateway standing in for the hosted card widget"""

import logging
import uuid
from typing import Optional

from ..models.checkout import PaymentIntent, PaymentIntentRequest, PaymentStatus

logger = logging.getLogger(__name__)

# Stripe test payment method that always declines
DECLINED_PAYMENT_METHODS = {"pm_card_chargeDeclined", "pm_card_visa_chargeDeclined"}


class PaymentGateway:
    """Creates and confirms payment intents in memory"""

    def __init__(self):
        self.intents: dict[str, PaymentIntent] = {}

    def create_and_confirm(
        self,
        request: PaymentIntentRequest,
        payment_method_id: str,
    ) -> PaymentIntent:
        """Create a payment intent and confirm it with the buyer's payment method"""
        intent_id = f"pi_{uuid.uuid4().hex[:24]}"

        if payment_method_id in DECLINED_PAYMENT_METHODS:
            status = PaymentStatus.REQUIRES_PAYMENT_METHOD
            error_message = "Your card was declined."
            logger.warning(f"Payment {intent_id} declined for {request.amount} {request.currency}")
        else:
            status = PaymentStatus.SUCCEEDED
            error_message = None
            logger.info(f"Payment {intent_id} succeeded for {request.amount} {request.currency}")

        intent = PaymentIntent(
            id=intent_id,
            client_secret=f"{intent_id}_secret_{uuid.uuid4().hex[:12]}",
            amount=request.amount,
            currency=request.currency,
            status=status,
            error_message=error_message,
        )
        self.intents[intent.id] = intent
        return intent

    def get_intent(self, intent_id: str) -> Optional[PaymentIntent]:
        """Get a payment intent by ID"""
        return self.intents.get(intent_id)
