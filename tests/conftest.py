import pytest
from fastapi.testclient import TestClient

from auth.credentials import CredentialStore
from auth.models import User
from auth.services import AuthService
from config import Settings
from database import Database
from institution.models import Institution
from license.models import License
from main import create_app


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings():
    test_settings = Settings()
    test_settings.DATABASE_URL = "sqlite://"
    test_settings.SECRET_KEY = "test-secret"
    test_settings.ALGORITHM = "HS256"
    test_settings.ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24
    test_settings.CORS_ORIGINS = ["*"]
    test_settings.AUTO_CREATE_SCHEMA = False
    test_settings.ENABLE_SCHEDULER = False
    return test_settings


@pytest.fixture
def database(settings):
    database = Database(settings.DATABASE_URL)
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def db(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def tokens(app):
    return app.state.token_service


@pytest.fixture
def make_institution(db):
    def _make(name="Hanbit University", domain="hanbit.ac.kr", is_active=True, contact_email=None):
        institution = Institution(name=name, domain=domain, is_active=is_active, contact_email=contact_email)
        db.add(institution)
        db.commit()
        db.refresh(institution)
        return institution
    return _make


@pytest.fixture
def make_user(db):
    def _make(email, password="password123", name="Test User", role="user", institution_id=None):
        user_id = CredentialStore(db).create_account(email, password)
        user = User(id=user_id, email=email, name=name, role=role, institution_id=institution_id)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def make_license(db):
    def _make(name="Basic", price=10000, duration_months=1, max_users=-1, is_active=True, features=None):
        license = License(
            name=name,
            price=price,
            duration_months=duration_months,
            max_users=max_users,
            is_active=is_active,
            features=features or [],
        )
        db.add(license)
        db.commit()
        db.refresh(license)
        return license
    return _make


@pytest.fixture
def institution(make_institution):
    return make_institution()


@pytest.fixture
def admin_user(make_user):
    return make_user("admin@example.com", name="Admin", role="admin")


@pytest.fixture
def regular_user(make_user, institution):
    return make_user("kim@hanbit.ac.kr", name="Kim", institution_id=institution.id)


@pytest.fixture
def other_user(make_user, institution):
    return make_user("lee@hanbit.ac.kr", name="Lee", institution_id=institution.id)


@pytest.fixture
def token_for(tokens):
    def _token(user, now=None):
        return tokens.issue(AuthService.claims_for(user), now=now)
    return _token


@pytest.fixture
def admin_headers(admin_user, token_for):
    return bearer(token_for(admin_user))


@pytest.fixture
def user_headers(regular_user, token_for):
    return bearer(token_for(regular_user))


@pytest.fixture
def other_headers(other_user, token_for):
    return bearer(token_for(other_user))
