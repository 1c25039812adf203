import os

# Keep test runs off the filesystem log handlers and the dev console handler.
os.environ.setdefault('LOG_TO_FILE', 'false')
os.environ.setdefault('ENVIRONMENT', 'testing')

import pytest

from backend.app import create_app
from backend.config.env_config import AppConfig
from backend.features.employees.repository.employee_repository import InMemoryEmployeeRepository

TEST_BASE_PATH = 'http://files.test'


@pytest.fixture
def app_config():
    return AppConfig(
        api_prefix='/api',
        base_path=TEST_BASE_PATH,
        upload_dir='public/uploads',
        jwt_secret='test-secret',
        environment='testing',
        ratelimit_enabled=False,
        testing=True,
    )


@pytest.fixture
def employee_repository():
    return InMemoryEmployeeRepository()


@pytest.fixture
def app(app_config, employee_repository, tmp_path):
    return create_app(app_config, employee_repository=employee_repository, upload_root=tmp_path)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def employee_service(app):
    return app.extensions['employee_controller'].employee_service


@pytest.fixture
def auth_header(app):
    token_service = app.extensions['token_service']

    def _make(*roles, subject='caller-1'):
        return {'Authorization': f'Bearer {token_service.issue(subject, roles)}'}

    return _make


@pytest.fixture
def employee_payload():
    return {
        'name': 'Ada Lovelace',
        'username': 'ada',
        'password': 'secret-pass',
        'role': 'Engineer',
        'experience': 4,
        'departmentId': 'dept-7',
        'address': {
            'line1': '12 Analytical St',
            'city': 'London',
            'state': 'Greater London',
            'country': 'UK',
            'pincode': 'N1 9GU',
        },
    }
