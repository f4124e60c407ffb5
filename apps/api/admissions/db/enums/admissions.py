"""Admission sub-process enums (documents and payments)."""

from enum import Enum


class DocumentType(str, Enum):
    IDENTIFICATION = "identification"
    CERTIFICATES = "certificates"
    PHOTOGRAPHS = "photographs"
    PROOF_OF_ADDRESS = "proof_of_address"
    OTHER = "other"


class DocumentStatus(str, Enum):
    """Review status of an admission document."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PaymentConcept(str, Enum):
    ADMISSION_FEE = "admission_fee"
    ENROLLMENT = "enrollment"
    MONTHLY_FEE = "monthly_fee"
    OTHER = "other"


class PaymentMethod(str, Enum):
    STRIPE = "stripe"
    PAYPAL = "paypal"
    TRANSFER = "transfer"
    CASH = "cash"


class PaymentStatus(str, Enum):
    """Status of a payment. Only COMPLETED counts toward enrollment."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
