"""
Test factories for generating realistic test data.

Uses factory_boy for declarative test data generation. Every factory builds a
plain dict shaped like the documents the activity log helpers receive.
"""

from .user import UserFactory
from .customer import CustomerFactory, CompanyFactory, CompanyCustomerFactory
from .segment import SegmentFactory, CompanySegmentFactory
from .conversation import ConversationMessageFactory, InternalNoteFactory

__all__ = [
    "UserFactory",
    "CustomerFactory",
    "CompanyFactory",
    "CompanyCustomerFactory",
    "SegmentFactory",
    "CompanySegmentFactory",
    "ConversationMessageFactory",
    "InternalNoteFactory",
]
