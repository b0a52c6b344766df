"""
User test factory.

Generates staff users that perform activities.
"""

import uuid

import factory
from faker import Faker

fake = Faker()


class UserFactory(factory.Factory):
    """
    Factory for generating User test data.

    Usage:
        user = UserFactory()
        user = UserFactory(id="u1")
    """

    class Meta:
        model = dict

    id = factory.LazyFunction(lambda: str(uuid.uuid4()))
    email = factory.LazyFunction(lambda: fake.email().lower())
    first_name = factory.LazyFunction(fake.first_name)
    last_name = factory.LazyFunction(fake.last_name)
