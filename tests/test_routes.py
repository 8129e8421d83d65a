import json
from datetime import timedelta

from flask_jwt_extended import create_access_token

from ors.store import get_store


class TestControllerRoutes:
    """HTTP surface over the screen dispatcher."""

    def test_save_returns_envelope(self, client):
        response = client.post('/ctl/role',
                               data=json.dumps({'operation': 'Save', 'name': 'Admin', 'description': 'Administrator'}),
                               content_type='application/json')
        assert response.status_code == 200
        data = json.loads(response.data)
        assert data['view'] == 'role_form'
        assert data['message'] == {'type': 'success', 'text': 'Data is successfully saved'}
        assert data['record']['id'] == 1
        assert data['record']['name'] == 'Admin'
        assert data['record']['created_by'] == 'root'
        assert data['record']['created_datetime'] > 0
        assert data['errors'] == {}

    def test_form_encoded_validation_errors(self, client):
        response = client.post('/ctl/college', data={'operation': 'Save', 'name': 'Stanford'})
        assert response.status_code == 200
        data = response.get_json()
        assert data['errors']['phone_no'] == 'Phone No is required'
        assert data['record']['name'] == 'Stanford'
        assert data['message'] is None

    def test_list_with_multi_value_ids(self, client):
        for name in ('Admin', 'Student', 'Faculty'):
            client.post('/ctl/role', data={'operation': 'Save', 'name': name, 'description': name})

        response = client.get('/ctl/role_list')
        data = response.get_json()
        assert [item['name'] for item in data['items']] == ['Admin', 'Student', 'Faculty']
        assert data['page_no'] == 1
        assert data['next_list_size'] == 0

        response = client.post('/ctl/role_list', data={'operation': 'Delete', 'ids': ['1', '3']})
        data = response.get_json()
        assert data['message']['text'] == 'Data is deleted successfully'
        assert [item['name'] for item in data['items']] == ['Student']

    def test_redirects(self, client):
        response = client.post('/ctl/role', data={'operation': 'Cancel'})
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/ctl/role_list')

    def test_unknown_screen(self, client):
        response = client.get('/ctl/nowhere')
        assert response.status_code == 404
        assert response.get_json()['view'] == 'error'

    def test_storage_error_renders_error_view(self, client, monkeypatch):
        from ors.exceptions import StorageError

        def _fail(*args, **kwargs):
            raise StorageError('Exception in add Role')

        monkeypatch.setattr(get_store('role'), 'add', _fail)
        response = client.post('/ctl/role', data={'operation': 'Save', 'name': 'Admin', 'description': 'x'})
        assert response.status_code == 500
        assert response.get_json() == {'view': 'error', 'message': 'Exception in add Role'}

    def test_user_record_hides_password(self, client, registered_user):
        user = get_store('user').find_by_unique_key(registered_user['login'])
        response = client.get(f'/ctl/user?id={user.id}')
        data = response.get_json()
        assert data['record']['login'] == registered_user['login']
        assert 'password' not in data['record']
        assert {'id': 2, 'name': 'student'} in data['preload']['role_list']


class TestSessionRoutes:
    """Sign in issues a token cookie; logout clears it."""

    def test_sign_in_sets_cookie_and_redirects(self, client, registered_user):
        response = client.post('/ctl/login', data={'operation': 'Sign In', **registered_user})
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/ctl/welcome')
        cookies = response.headers.getlist('Set-Cookie')
        assert any(cookie.startswith('access_token_cookie=') for cookie in cookies)

        response = client.get('/ctl/my_profile')
        assert response.status_code == 200
        assert response.get_json()['record']['login'] == registered_user['login']

    def test_invalid_sign_in(self, client, registered_user):
        response = client.post('/ctl/login', data={
            'operation': 'Sign In',
            'login': registered_user['login'],
            'password': 'Wrong@123',
        })
        data = response.get_json()
        assert data['message'] == {'type': 'error', 'text': 'Invalid LoginId And Password'}

    def test_profile_requires_sign_in(self, client):
        response = client.get('/ctl/my_profile')
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/ctl/login')

    def test_logout_clears_cookie(self, client, registered_user):
        client.post('/ctl/login', data={'operation': 'Sign In', **registered_user})
        response = client.post('/ctl/login', data={'operation': 'Logout'})
        assert response.get_json()['message']['text'] == 'Logout Successful!'
        cookies = response.headers.getlist('Set-Cookie')
        assert any(cookie.startswith('access_token_cookie=;') for cookie in cookies)

        response = client.get('/ctl/my_profile')
        assert response.status_code == 302

    def test_change_password_over_http(self, client, registered_user):
        client.post('/ctl/login', data={'operation': 'Sign In', **registered_user})
        response = client.post('/ctl/change_password', data={
            'operation': 'Save',
            'old_password': registered_user['password'],
            'new_password': 'Fresh@456',
            'confirm_password': 'Fresh@456',
        })
        assert response.get_json()['message']['text'] == 'Password has been changed Successfully'

    def test_logout_on_get_clears_cookie(self, client, registered_user):
        client.post('/ctl/login', data={'operation': 'Sign In', **registered_user})
        response = client.get('/ctl/login?operation=Logout')
        assert response.status_code == 200
        assert response.get_json()['message'] == {'type': 'success', 'text': 'Logout Successful!'}
        cookies = response.headers.getlist('Set-Cookie')
        assert any(cookie.startswith('access_token_cookie=;') for cookie in cookies)

        response = client.get('/ctl/my_profile')
        assert response.status_code == 302

    def test_expired_token_is_treated_as_anonymous(self, client, registered_user):
        token = create_access_token(identity=registered_user['login'], expires_delta=timedelta(seconds=-10))
        client.set_cookie('access_token_cookie', token)
        response = client.get('/ctl/login')
        assert response.status_code == 200
        assert response.get_json()['view'] == 'login_view'
        cookies = response.headers.getlist('Set-Cookie')
        assert any(cookie.startswith('access_token_cookie=;') for cookie in cookies)

        client.set_cookie('access_token_cookie', token)
        response = client.get('/ctl/my_profile')
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/ctl/login')

    def test_malformed_token_is_treated_as_anonymous(self, client):
        response = client.get('/ctl/role_list', headers={'Authorization': 'Bearer not-a-token'})
        assert response.status_code == 200
        assert response.get_json()['view'] == 'role_list'

    def test_sign_in_replaces_expired_token(self, client, registered_user):
        token = create_access_token(identity=registered_user['login'], expires_delta=timedelta(seconds=-10))
        client.set_cookie('access_token_cookie', token)
        response = client.post('/ctl/login', data={'operation': 'Sign In', **registered_user})
        assert response.status_code == 302
        cookies = response.headers.getlist('Set-Cookie')
        assert any(cookie.startswith('access_token_cookie=ey') for cookie in cookies)


class TestRecordRoutes:
    """Form submissions that carry unusual values."""

    def test_out_of_range_creation_time_saves_with_now(self, client):
        response = client.post('/ctl/role', data={
            'operation': 'Save',
            'name': 'Admin',
            'description': 'Administrator',
            'created_datetime': '99999999999999999',
        })
        assert response.status_code == 200
        data = response.get_json()
        assert data['message']['text'] == 'Data is successfully saved'
        assert data['record']['created_datetime'] == data['record']['modified_datetime']

    def test_user_update_without_password(self, client, registered_user):
        user = get_store('user').find_by_unique_key(registered_user['login'])
        response = client.post('/ctl/user', data={
            'operation': 'Update',
            'id': str(user.id),
            'first_name': 'Asha',
            'last_name': 'Rao',
            'login': registered_user['login'],
            'password': '',
            'confirm_password': '',
            'gender': 'Female',
            'dob': '2001-04-12',
            'mobile_no': '9876543210',
            'role_id': str(user.role_id),
        })
        data = response.get_json()
        assert data['errors'] == {}
        assert data['message']['text'] == 'Data is successfully updated'
        assert get_store('user').authenticate(registered_user['login'], registered_user['password']).last_name == 'Rao'
