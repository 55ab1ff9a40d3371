from greenconstructhub.notify.email import EmailDeliveryError, EmailSender

__all__ = ["EmailDeliveryError", "EmailSender"]
