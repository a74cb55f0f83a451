import logging
from fastapi_mail import MessageSchema, MessageType
from typing import Dict, Any

from ..mails.send_mail import mail


logger = logging.getLogger(__name__)


class EmailService:

    async def send_template_email(
        self,
        to_email: str,
        subject: str,
        template_name: str,
        context: Dict[str, Any]
    ) -> bool:
        """
        Sends an email using a template with provided context.

        Args:
            to_email (str): Recipient email address
            subject (str): Email subject
            template_name (str): Name of the template file (e.g., "order-confirmation.html")
            context (Dict[str, Any]): Context variables for the template

        Returns:
            bool: True if email was sent successfully, False otherwise
        """
        try:
            message = MessageSchema(
                subject=subject,
                recipients=[to_email],
                template_body=context,
                subtype=MessageType.html,
            )

            await mail.send_message(message, template_name=template_name)
            return True

        except Exception as e:
            logger.error(f"Failed to send email to {to_email}: {str(e)}")
            return False

    async def send_order_confirmation(
        self,
        to_email: str,
        order_data: Dict[str, Any]
    ) -> bool:
        """
        Sends an order confirmation email.

        Args:
            to_email (str): Recipient email address
            order_data (Dict[str, Any]): Order details for the template

        Returns:
            bool: True if email was sent successfully, False otherwise
        """
        subject = f"Order Confirmation - #{order_data.get('order_number', '')}"
        return await self.send_template_email(
            to_email=to_email,
            subject=subject,
            template_name="order-confirmation.html",
            context=order_data
        )
