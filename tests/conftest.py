import os
import sys

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEFAULTS"] = "0"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["USE_OPENAI"] = "0"

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from app import create_app
from models import db
import auth_service
import user_service


@pytest.fixture
def app():
    app = create_app({"TESTING": True, "SEED_DEFAULTS": False})
    with app.app_context():
        db.drop_all()
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_user(app):
    return user_service.create_user("Administrador", "admin", "12345", rol="admin", area="Administración")


@pytest.fixture
def cotizador_user(app):
    return user_service.create_user("Cotizador", "cotizador", "12345", rol="cotizador", area="Comercial")


def bearer(user, area=None):
    token = auth_service.login(user.to_dict(), area)["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_headers(app):
    return bearer


@pytest.fixture
def admin_headers(admin_user):
    return bearer(admin_user)


@pytest.fixture
def cotizador_headers(cotizador_user):
    return bearer(cotizador_user)
