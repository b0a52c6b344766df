"""
Conversation message and internal note test factories.
"""

import uuid

import factory
from faker import Faker

fake = Faker()


class ConversationMessageFactory(factory.Factory):
    """Factory for messages a customer sent in a conversation."""

    class Meta:
        model = dict

    id = factory.LazyFunction(lambda: str(uuid.uuid4()))
    conversation_id = factory.LazyFunction(lambda: str(uuid.uuid4()))
    content = factory.LazyFunction(fake.sentence)


class InternalNoteFactory(factory.Factory):
    """
    Factory for internal notes written by staff about a customer.

    Usage:
        note = InternalNoteFactory(content_type="company", content_type_id=company["id"])
    """

    class Meta:
        model = dict

    id = factory.LazyFunction(lambda: str(uuid.uuid4()))
    content = factory.LazyFunction(fake.paragraph)
    content_type = "customer"
    content_type_id = factory.LazyFunction(lambda: str(uuid.uuid4()))
