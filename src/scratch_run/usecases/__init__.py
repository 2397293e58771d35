from .config_models import AppConfig, EngineConfig, InputConfig, LoggingConfig
from .delivery import DeliveryStrategy, EagerDelivery, IncrementalDelivery, build_delivery, split_lines
from .request_bridge import READ_TOKEN_QUESTION, RequestBridge, classify_question

__all__ = [
    "AppConfig",
    "DeliveryStrategy",
    "EagerDelivery",
    "EngineConfig",
    "IncrementalDelivery",
    "InputConfig",
    "LoggingConfig",
    "READ_TOKEN_QUESTION",
    "RequestBridge",
    "build_delivery",
    "classify_question",
    "split_lines",
]
