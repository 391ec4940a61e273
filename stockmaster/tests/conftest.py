"""
Pytest fixtures for Stockmaster tests.
"""

from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.test import Client

from stockmaster import stock
from stockmaster.models import Category, Product, Warehouse
from stockmaster.services.auth import Accounts


User = get_user_model()


@pytest.fixture
def user(db):
    """Create a test user (email doubles as username)."""
    return User.objects.create_user(
        username='clerk@example.com',
        email='clerk@example.com',
        password='secret123',
        first_name='Stock Clerk',
    )


@pytest.fixture
def category(db):
    return Category.objects.create(name='Hardware')


@pytest.fixture
def product(db, category):
    """Product with reorder level 5."""
    return Product.objects.create(
        name='Widget',
        sku='WID-001',
        category=category,
        unit='pcs',
        reorder_level=Decimal('5'),
    )


@pytest.fixture
def untracked_product(db, category):
    """Product with reorder level 0 (never alerts)."""
    return Product.objects.create(
        name='Bolt',
        sku='BLT-001',
        category=category,
        reorder_level=Decimal('0'),
    )


@pytest.fixture
def main(db):
    """Main warehouse (A)."""
    return Warehouse.objects.create(code='MAIN', name='Main Warehouse', location='Pune')


@pytest.fixture
def overflow(db):
    """Second warehouse (B)."""
    return Warehouse.objects.create(code='WH-2', name='Overflow Warehouse')


@pytest.fixture
def receive():
    """Helper: create and complete a receipt in one call."""
    def _receive(product, warehouse, quantity, user=None):
        receipt = stock.create_receipt(product, warehouse, Decimal(str(quantity)), user=user)
        return stock.complete_receipt(receipt.pk, user=user)
    return _receive


@pytest.fixture
def token(user):
    return Accounts.issue_token(user)


@pytest.fixture
def api(token):
    """Test client sending a valid bearer token."""
    return Client(HTTP_AUTHORIZATION=f'Bearer {token}')
