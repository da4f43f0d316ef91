"""
Tests for authentication endpoints
"""
from django.conf import settings
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from infrastructure.persistence.models import UserRoleChoices, UserStatusChoices
from tests.factories import AuthenticatedAPIClient, TestDataFactory


class LoginTests(TestCase):
    """Test login"""

    def setUp(self):
        self.client = APIClient()
        self.user = TestDataFactory.create_user(email='worker@test.com', name='Worker')

    def test_login_success(self):
        """Test login returns tokens, the user and the auth cookie"""
        response = self.client.post('/api/v1/auth/login/', {
            'email': 'worker@test.com',
            'password': 'testpass123',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Login successful')
        self.assertEqual(response.data['user']['email'], 'worker@test.com')
        self.assertEqual(response.data['user']['role'], UserRoleChoices.WORKER)
        self.assertIn('token', response.data)
        self.assertIn('refresh', response.data)
        self.assertEqual(response.cookies[settings.AUTH_COOKIE_NAME].value, response.data['token'])

        self.user.refresh_from_db()
        self.assertIsNotNone(self.user.last_login)

    def test_login_email_is_case_insensitive(self):
        """Test login lowercases the email"""
        response = self.client.post('/api/v1/auth/login/', {
            'email': 'WORKER@test.com',
            'password': 'testpass123',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_login_wrong_password(self):
        """Test login with a wrong password"""
        response = self.client.post('/api/v1/auth/login/', {
            'email': 'worker@test.com',
            'password': 'wrong',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data['error'], 'Invalid credentials')

    def test_login_inactive_user(self):
        """Test inactive users cannot log in"""
        self.user.status = UserStatusChoices.INACTIVE
        self.user.save()

        response = self.client.post('/api/v1/auth/login/', {
            'email': 'worker@test.com',
            'password': 'testpass123',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_login_missing_fields(self):
        """Test login without a password"""
        response = self.client.post('/api/v1/auth/login/', {'email': 'worker@test.com'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_cookie_authenticates_requests(self):
        """Test the auth cookie alone authenticates later requests"""
        self.client.post('/api/v1/auth/login/', {
            'email': 'worker@test.com',
            'password': 'testpass123',
        }, format='json')

        response = self.client.get('/api/v1/auth/me/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['email'], 'worker@test.com')


class RegisterTests(TestCase):
    """Test registration"""

    def setUp(self):
        self.client = APIClient()

    def test_register_success(self):
        """Test creating an account"""
        response = self.client.post('/api/v1/auth/register/', {
            'email': 'New@Test.com',
            'password': 'secret123',
            'name': 'New User',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'User created successfully')
        self.assertEqual(response.data['user']['email'], 'new@test.com')
        self.assertEqual(response.data['user']['role'], UserRoleChoices.WORKER)

    def test_register_duplicate_email(self):
        """Test registering an existing email"""
        TestDataFactory.create_user(email='taken@test.com')

        response = self.client.post('/api/v1/auth/register/', {
            'email': 'taken@test.com',
            'password': 'secret123',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['error'], 'User with this email already exists')

    def test_register_short_password(self):
        """Test registration rejects short passwords"""
        response = self.client.post('/api/v1/auth/register/', {
            'email': 'short@test.com',
            'password': '123',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('password', response.data)


class TokenTests(TestCase):
    """Test refresh, logout and profile endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user(email='me@test.com', name='Me')
        self.refresh = str(RefreshToken.for_user(self.user))
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_refresh_token(self):
        """Test refreshing the access token"""
        response = self.client.post('/api/v1/auth/refresh/', {'refresh': self.refresh}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)

    def test_refresh_invalid_token(self):
        """Test refreshing with a garbage token"""
        response = self.client.post('/api/v1/auth/refresh/', {'refresh': 'not-a-token'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_blacklists_refresh_token(self):
        """Test logout blacklists the refresh token"""
        response = self.client.post('/api/v1/auth/logout/', {'refresh': self.refresh}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['message'], 'Logout successful')

        response = self.client.post('/api/v1/auth/refresh/', {'refresh': self.refresh}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_requires_authentication(self):
        """Test logout without credentials"""
        self.client.logout()

        response = self.client.post('/api/v1/auth/logout/', {}, format='json')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me(self):
        """Test reading the current profile"""
        response = self.client.get('/api/v1/auth/me/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'Me')
        self.assertNotIn('password', response.data)

    def test_update_profile(self):
        """Test updating the current profile ignores the role"""
        response = self.client.put('/api/v1/auth/update-profile/', {
            'name': 'Renamed',
            'phone': '0811',
            'role': UserRoleChoices.ADMIN,
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], 'Renamed')
        self.assertEqual(response.data['role'], UserRoleChoices.WORKER)

    def test_change_password(self):
        """Test changing the password"""
        response = self.client.post('/api/v1/auth/change-password/', {
            'old_password': 'testpass123',
            'new_password': 'newpass456',
            'new_password_confirm': 'newpass456',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('newpass456'))

    def test_change_password_wrong_old(self):
        """Test changing the password with a wrong current password"""
        response = self.client.post('/api/v1/auth/change-password/', {
            'old_password': 'nope',
            'new_password': 'newpass456',
            'new_password_confirm': 'newpass456',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('old_password', response.data)

    def test_change_password_mismatch(self):
        """Test password confirmation must match"""
        response = self.client.post('/api/v1/auth/change-password/', {
            'old_password': 'testpass123',
            'new_password': 'newpass456',
            'new_password_confirm': 'other456',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
