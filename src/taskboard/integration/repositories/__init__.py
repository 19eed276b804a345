from .in_memory_document_collection import InMemoryDocumentCollection
from .motor_document_collection import MotorDocumentCollection
from .store_errors import translate_store_errors

__all__ = [
    "InMemoryDocumentCollection",
    "MotorDocumentCollection",
    "translate_store_errors",
]
