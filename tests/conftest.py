"""
Pytest configuration and fixtures
"""
import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from django.test import Client
from django.utils import timezone

from leads.schemas import CustomerRequirement


@pytest.fixture(autouse=True)
def reset_requirement_store():
    """Reset the store instance before each test"""
    from leads import store
    store._store_instance = None
    yield
    store._store_instance = None


@pytest.fixture
def memory_store(settings):
    """Use the in-memory store for the duration of a test"""
    from leads.store import get_requirement_store
    settings.REQUIREMENT_STORE = "leads.store.InMemoryRequirementStore"
    return get_requirement_store()


@pytest.fixture
def sample_requirement_data():
    """A valid public form submission (captcha answer not included)"""
    return {
        'name': 'Ann Lee',
        'mobile': '9876543210',
        'email': 'ann@x.com',
        'budget': 7500000,
        'flat_size': 1200,
        'current_location': 'HSR',
        'preferred_location': 'Sarjapur',
        'floor_preference': 4,
        'direction': 'North',
        'looking_for': 'Gated',
        'requirement': 'balcony',
    }


@pytest.fixture
def make_record():
    """Factory for stored requirement records"""
    counter = {'n': 0}
    base_time = timezone.make_aware(datetime(2025, 3, 1, 10, 0))

    def _make(**overrides):
        counter['n'] += 1
        values = {
            'id': f'rec{counter["n"]}',
            'name': f'Lead {counter["n"]}',
            'mobile': '9876543210',
            'alt_mobile': None,
            'email': f'lead{counter["n"]}@example.com',
            'budget': Decimal('6000000'),
            'flat_size': Decimal('1100'),
            'current_location': 'Koramangala',
            'preferred_location': 'Whitefield',
            'direction': 'East',
            'floor_preference': 2,
            'looking_for': 'Gated',
            'requirement': '2BHK near metro',
            'created_at': base_time + timedelta(hours=counter['n']),
            'status': 'New',
        }
        values.update(overrides)
        return CustomerRequirement(**values)

    return _make


def answer_captcha(client, path):
    """Fetch a challenge from ``path`` and return its answer"""
    challenge = client.get(path).json()
    return challenge["num1"] + challenge["num2"]


@pytest.fixture
def solve_captcha():
    """Helper that answers the challenge served at a captcha endpoint"""
    return answer_captcha


@pytest.fixture
def admin_client(db):
    """A Django test client logged in as the admin"""
    client = Client()
    answer = answer_captcha(client, '/api/auth/captcha')
    response = client.post('/api/auth/session', {
        'email': 'admin@company.com',
        'password': '12345',
        'captcha_answer': answer,
    }, content_type='application/json')
    assert response.status_code == 200
    return client
