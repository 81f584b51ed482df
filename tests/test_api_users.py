"""
Tests for registration, login and user administration endpoints.
"""
import pytest
from django.contrib.auth.models import Group, User
from rest_framework.test import APIClient

from apps.accounts.services import ROLE_ADMIN

pytestmark = pytest.mark.django_db

PASSWORD = 'Str0ng-Passphrase!'


@pytest.fixture
def site_admin(db):
    user = User.objects.create_user(username='admin', email='admin@test.com', password=PASSWORD)
    user.groups.add(Group.objects.get(name=ROLE_ADMIN))
    return user


@pytest.fixture
def admin_client(site_admin):
    client = APIClient()
    client.force_authenticate(user=site_admin)
    return client


def signup(client, email='New@Test.com'):
    return client.post('/api/v1/auth/signup/', {
        'email': email,
        'password': PASSWORD,
        'password_confirm': PASSWORD,
    }, format='json')


def login(client, email='new@test.com'):
    return client.post('/api/v1/auth/login/', {'email': email, 'password': PASSWORD}, format='json')


class TestRegistration:

    def test_signup_creates_inactive_account_without_tokens(self, api_client):
        response = signup(api_client)

        assert response.status_code == 201
        assert response.data['user']['email'] == 'new@test.com'
        assert response.data['user']['is_active'] is False
        assert 'access' not in response.data
        assert not User.objects.get(email='new@test.com').is_active

    def test_login_refused_until_activated(self, api_client):
        signup(api_client)

        response = login(api_client)

        assert response.status_code == 400
        assert 'access' not in response.data

    def test_activated_account_can_log_in(self, api_client, admin_client):
        user_id = signup(api_client).data['user']['id']

        activation = admin_client.patch(f'/api/v1/users/{user_id}/', {'is_active': True}, format='json')
        response = login(api_client)

        assert activation.status_code == 200
        assert activation.data['is_active'] is True
        assert response.status_code == 200
        assert 'access' in response.data

    def test_password_mismatch(self, api_client):
        response = api_client.post('/api/v1/auth/signup/', {
            'email': 'x@test.com', 'password': PASSWORD, 'password_confirm': 'different-Passphrase1',
        }, format='json')

        assert response.status_code == 400
        assert not User.objects.filter(email='x@test.com').exists()

    def test_me(self, owner_client):
        response = owner_client.get('/api/v1/auth/me/')

        assert response.status_code == 200
        assert response.data['username'] == 'owner'


class TestUserAdministration:

    def test_regular_user_is_forbidden(self, owner_client):
        assert owner_client.get('/api/v1/users/').status_code == 403

    def test_list_includes_roles(self, admin_client, site_admin, owner):
        response = admin_client.get('/api/v1/users/')

        assert response.status_code == 200
        roles = {u['username']: u['roles'] for u in response.data}
        assert roles['admin'] == [ROLE_ADMIN]
        assert roles['owner'] == []

    def test_deactivate_unknown_user(self, admin_client):
        response = admin_client.patch('/api/v1/users/999/', {'is_active': False}, format='json')

        assert response.status_code == 404

    def test_deactivated_user_loses_api_access(self, admin_client, owner):
        admin_client.patch(f'/api/v1/users/{owner.id}/', {'is_active': False}, format='json')
        owner.refresh_from_db()
        client = APIClient()
        client.force_authenticate(user=owner)

        assert client.get('/api/v1/trees/').status_code == 403

    def test_grant_and_revoke_admin_role(self, admin_client, owner):
        url = f'/api/v1/users/{owner.id}/roles/'

        added = admin_client.post(url, {'role': ROLE_ADMIN}, format='json')
        again = admin_client.post(url, {'role': ROLE_ADMIN}, format='json')
        removed = admin_client.delete(f'{url}{ROLE_ADMIN}/')

        assert added.status_code == 200
        assert added.data['roles'] == [ROLE_ADMIN]
        assert again.status_code == 400
        assert removed.status_code == 200
        assert removed.data['roles'] == []

    def test_unknown_role_rejected(self, admin_client, owner):
        response = admin_client.post(f'/api/v1/users/{owner.id}/roles/', {'role': 'Wizard'}, format='json')

        assert response.status_code == 400

    def test_remove_role_not_held(self, admin_client, owner):
        response = admin_client.delete(f'/api/v1/users/{owner.id}/roles/{ROLE_ADMIN}/')

        assert response.status_code == 404
