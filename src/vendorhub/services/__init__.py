from .geolocation import GeolocationProvider, StaticGeolocationProvider, acquire_location
from .notifications import LoggingNotifier, Notification, NotificationLevel, Notifier
from .payment import PaymentGateway, PaymentReceipt, SimulatedPaymentGateway
from .session import CredentialCheck, SessionGate, StaticCredentialCheck
from .workflow import ApplicationState, Screen, WorkflowController

__all__ = [
    "ApplicationState",
    "CredentialCheck",
    "GeolocationProvider",
    "LoggingNotifier",
    "Notification",
    "NotificationLevel",
    "Notifier",
    "PaymentGateway",
    "PaymentReceipt",
    "Screen",
    "SessionGate",
    "SimulatedPaymentGateway",
    "StaticCredentialCheck",
    "StaticGeolocationProvider",
    "WorkflowController",
    "acquire_location",
]
