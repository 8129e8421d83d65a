import os

import pytest

from ors import create_app
from ors.extensions import db
from ors.models import Role
from ors.store import get_store
from ors.utils.data_utility import current_timestamp


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    os.environ['FLASK_ENV'] = 'testing'

    app = create_app('testing')

    with app.app_context():
        yield app


@pytest.fixture(autouse=True)
def _fresh_tables(app):
    """Give every test empty tables."""
    db.create_all()
    yield
    db.session.remove()
    db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def runner(app):
    """Create test CLI runner."""
    return app.test_cli_runner()


@pytest.fixture(scope='function')
def role_store():
    return get_store('role')


@pytest.fixture(scope='function')
def user_store():
    return get_store('user')


@pytest.fixture(scope='function')
def marksheet_store():
    return get_store('marksheet')


@pytest.fixture(scope='function')
def make_role(role_store):
    """Add a role through the store and return it."""
    def _make_role(name='Admin', description='Administrator'):
        now = current_timestamp()
        role = Role(
            name=name,
            description=description,
            created_by='root',
            modified_by='root',
            created_datetime=now,
            modified_datetime=now,
        )
        role_store.add(role)
        return role
    return _make_role


@pytest.fixture(scope='function')
def seeded_roles(runner):
    """Seed the default roles through the CLI command."""
    result = runner.invoke(args=['seed'])
    assert result.exit_code == 0
    return result


@pytest.fixture(scope='function')
def registered_user(client, seeded_roles):
    """Register a user through the registration screen and return its credentials."""
    credentials = {'login': 'asha@example.com', 'password': 'Secret@123'}
    response = client.post('/ctl/user_registration', json={
        'operation': 'Sign Up',
        'first_name': 'Asha',
        'last_name': 'Verma',
        'login': credentials['login'],
        'password': credentials['password'],
        'confirm_password': credentials['password'],
        'gender': 'Female',
        'dob': '2001-04-12',
        'mobile_no': '9876543210',
    })
    assert response.status_code == 200
    assert response.get_json()['message']['text'] == 'Registration successful!'
    return credentials
