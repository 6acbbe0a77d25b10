from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging
import secrets
import uuid

from app.config import settings
from app.exceptions import ForbiddenError, NotFoundError, ServiceValidationError
from domain.models import AppUser, Order, PaymentIntent
from domain.enums import OrderStatus, PaymentIntentStatus
from domain.schemas.marketplace_schemas import (
    PaymentIntentCreate,
    PaymentIntentResponse,
    PaymentConfirmResponse,
    OrderSummary,
)
from repositories import OrderRepository, PaymentIntentRepository
from services.marketplace_service import MarketplaceService

logger = logging.getLogger("appsuite.payments")


class PaymentService:
    """
    In-house payment flow for marketplace orders.

    create_intent opens a pending order plus an intent awaiting confirmation;
    confirm settles both and takes the listing off the market; cancel voids both.
    """

    @staticmethod
    def create_intent(
        db: Session, buyer: AppUser, data: PaymentIntentCreate
    ) -> PaymentIntent:
        """
        Start a purchase.

        Raises:
            NotFoundError: Unknown product
            ServiceValidationError: Product unavailable or owned by the buyer
        """
        product = MarketplaceService.get_product(db, data.product_id)
        if not product.is_available:
            raise ServiceValidationError("Product is not available for purchase")
        if product.seller_id == buyer.user_id:
            raise ServiceValidationError("You cannot buy your own product")

        currency = (data.currency or settings.default_currency).lower()
        try:
            order = Order(
                buyer_id=buyer.user_id,
                seller_id=product.seller_id,
                product_id=product.product_id,
                amount=product.price,
                currency=currency,
                status=OrderStatus.PENDING,
            )
            db.add(order)
            db.flush()

            intent_id = uuid.uuid4()
            intent = PaymentIntent(
                intent_id=intent_id,
                order_id=order.order_id,
                buyer_id=buyer.user_id,
                amount=product.price,
                currency=currency,
                status=PaymentIntentStatus.REQUIRES_CONFIRMATION,
                client_secret=f"{intent_id.hex}_secret_{secrets.token_urlsafe(24)}",
            )
            db.add(intent)
            order.payment_intent_id = intent_id
            db.commit()
            db.refresh(intent)
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Failed to create payment intent for product {product.product_id}")
            raise

        logger.info(
            f"Payment intent {intent.intent_id} created for order {order.order_id} "
            f"amount={intent.amount} {currency}"
        )
        return intent

    @staticmethod
    def get_intent(db: Session, user: AppUser, intent_id: uuid.UUID) -> PaymentIntent:
        intent = PaymentIntentRepository(db).get_by_id(intent_id)
        if not intent:
            raise NotFoundError(f"Payment intent {intent_id} not found")
        if intent.buyer_id != user.user_id:
            raise ForbiddenError("This payment intent belongs to another user")
        return intent

    @staticmethod
    def confirm(db: Session, user: AppUser, intent_id: uuid.UUID) -> PaymentConfirmResponse:
        """
        Settle a payment intent.

        Raises:
            ServiceValidationError: Intent is not awaiting confirmation, or product sold meanwhile
        """
        intent = PaymentService.get_intent(db, user, intent_id)
        if intent.status != PaymentIntentStatus.REQUIRES_CONFIRMATION:
            raise ServiceValidationError(
                f"Payment intent cannot be confirmed in status {intent.status.value}"
            )
        order = OrderRepository(db).get_by_id(intent.order_id)
        product = order.product
        if not product.is_available:
            raise ServiceValidationError("Product is no longer available")

        intent.status = PaymentIntentStatus.SUCCEEDED
        order.status = OrderStatus.PAID
        product.is_available = False
        db.commit()
        db.refresh(intent)
        logger.info(f"Payment {intent.intent_id} succeeded; order {order.order_id} paid")

        return PaymentConfirmResponse(
            success=True,
            payment_intent=PaymentIntentResponse.model_validate(intent),
            order=OrderSummary(order_id=order.order_id, status=order.status),
        )

    @staticmethod
    def cancel(db: Session, user: AppUser, intent_id: uuid.UUID) -> PaymentIntent:
        """
        Void a payment intent and its order.

        Raises:
            ServiceValidationError: Intent already succeeded
        """
        intent = PaymentService.get_intent(db, user, intent_id)
        if intent.status == PaymentIntentStatus.SUCCEEDED:
            raise ServiceValidationError("A succeeded payment cannot be cancelled")
        if intent.status == PaymentIntentStatus.CANCELED:
            return intent

        intent.status = PaymentIntentStatus.CANCELED
        order: Optional[Order] = OrderRepository(db).get_by_id(intent.order_id)
        if order is not None:
            order.status = OrderStatus.CANCELLED
        db.commit()
        db.refresh(intent)
        logger.info(f"Payment intent {intent_id} cancelled")
        return intent
