import pytest
from flask_jwt_extended import create_access_token

from bulk_user_admin import create_app
from bulk_user_admin.config import TestingConfig
from bulk_user_admin.extensions import db
from bulk_user_admin.models import Role, Section, User
from bulk_user_admin.security import AdminCapability
from bulk_user_admin.services import UserAdministrationQueryService

from tests.fakes import FakeDirectory, FakeRole, FakeSection, FakeSectionRegistry, FakeUser


class TestConfig(TestingConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    API_PREFIX = '/api/v1/bulk-user-admin'


API = TestConfig.API_PREFIX


# --- service level (in-memory directory) ---

@pytest.fixture()
def roles():
    return {
        'writer': FakeRole(1, 'Writer'),
        'admin': FakeRole(2, 'Administrators'),
        'editor': FakeRole(3, 'Editor'),
    }


@pytest.fixture()
def fake_users(roles):
    return [
        FakeUser(1, 'Ada Lovelace', 'ada@example.com', roles['editor'],
                 is_approved=True, is_locked_out=False, allowed_sections=['content']),
        FakeUser(2, 'Brian Kernighan', 'brian@example.com', roles['writer'],
                 is_approved=True, is_locked_out=True, allowed_sections=['content', 'media']),
        FakeUser(3, 'Grace Hopper', 'grace@navy.mil', roles['admin'],
                 is_approved=False, is_locked_out=False, allowed_sections=['users']),
    ]


@pytest.fixture()
def fake_directory(fake_users, roles):
    return FakeDirectory(fake_users, roles.values())


@pytest.fixture()
def fake_sections():
    return FakeSectionRegistry([
        FakeSection('users', 'Users', sort_order=4),
        FakeSection('content', 'Content', sort_order=0),
        FakeSection('settings', 'Settings', sort_order=2),
        FakeSection('media', 'Media', sort_order=1),
    ])


@pytest.fixture()
def service(fake_directory, fake_sections):
    return UserAdministrationQueryService(fake_directory, fake_sections)


@pytest.fixture()
def admin():
    return AdminCapability(actor_id='99', sections=frozenset({'users', 'content'}))


# --- HTTP level (SQLite directory) ---

@pytest.fixture()
def app_ctx(tmp_path):
    TestConfig.LOG_DIR = str(tmp_path / 'logs')
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app_ctx):
    return app_ctx.test_client()


@pytest.fixture()
def directory_rows(app_ctx):
    db.session.add_all([
        Section(alias='content', name='Content', sort_order=0),
        Section(alias='media', name='Media', sort_order=1),
        Section(alias='settings', name='Settings', sort_order=2),
        Section(alias='users', name='Users', sort_order=4),
    ])
    writer = Role(alias='writer', name='Writer')
    admin_role = Role(alias='administrators', name='Administrators')
    editor = Role(alias='editor', name='Editor')
    db.session.add_all([writer, admin_role, editor])
    db.session.flush()

    ada = User(name='Ada Lovelace', email='ada@example.com', username='ada', role=editor,
               is_approved=True, is_locked_out=False)
    ada.add_allowed_section('content')
    brian = User(name='Brian Kernighan', email='brian@example.com', username='brian', role=writer,
                 is_approved=True, is_locked_out=True)
    brian.add_allowed_section('content')
    brian.add_allowed_section('media')
    grace = User(name='Grace Hopper', email='grace@navy.mil', username='grace', role=admin_role,
                 is_approved=False, is_locked_out=False)
    grace.add_allowed_section('users')
    db.session.add_all([ada, brian, grace])
    db.session.commit()
    return {
        'roles': {'writer': writer.id, 'admin': admin_role.id, 'editor': editor.id},
        'users': {'ada': ada.id, 'brian': brian.id, 'grace': grace.id},
    }


def _header(sections):
    token = create_access_token(identity='1', additional_claims={'sections': sections})
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture()
def admin_header(app_ctx):
    return _header(['content', 'users'])


@pytest.fixture()
def editor_header(app_ctx):
    return _header(['content'])
