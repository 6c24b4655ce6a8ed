import os
import sys

import pytest
from flask import g

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from flagstack_app import create_app, db
from flagstack_app.config import Config
from flagstack_app.models import Flag, FlagType, User
from flagstack_app.modules.auth.schemas import AuthenticatedUser
from flagstack_app.modules.catalog.schemas import CatalogItem


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    LOG_LEVEL = 'WARNING'
    IDENTITY_SYNC_TOKEN = 'test-sync-token'


SAMPLE_FLAGS = [
    dict(key='alpha', type=FlagType.FLAG_LETTER, category='letters', name='Alpha',
         meaning='Diver down', image_path='/flags/alpha.svg', colors=['white', 'blue'],
         pattern='swallowtail-vertical-split', order=1),
    dict(key='bravo', type=FlagType.FLAG_LETTER, category='letters', name='Bravo',
         meaning='Dangerous goods', image_path='/flags/bravo.svg', colors=['red'],
         pattern='swallowtail-solid', order=2),
    dict(key='charlie', type=FlagType.FLAG_LETTER, category='letters', name='Charlie',
         meaning='Affirmative', image_path='/flags/charlie.svg', colors=['blue', 'white', 'red'],
         pattern='horizontal-stripes', order=3),
    dict(key='delta', type=FlagType.FLAG_LETTER, category='letters', name='Delta',
         meaning='Keep clear', image_path='/flags/delta.svg', colors=['yellow', 'blue'],
         pattern='horizontal-stripes', order=4),
    dict(key='echo', type=FlagType.FLAG_LETTER, category='letters', name='Echo',
         meaning='Altering course to starboard', image_path='/flags/echo.svg', colors=['blue', 'red'],
         pattern='horizontal-halves', order=5),
    dict(key='foxtrot', type=FlagType.FLAG_LETTER, category='letters', name='Foxtrot',
         meaning='I am disabled', image_path='/flags/foxtrot.svg', colors=['white', 'red'],
         pattern='diamond', order=6),
    dict(key='pennant-one', type=FlagType.PENNANT_NUMBER, category='numbers', name='Pennant One',
         meaning='Numeral 1', image_path='/flags/one.svg', colors=['white', 'red'],
         pattern='disc', order=7),
    dict(key='pennant-two', type=FlagType.PENNANT_NUMBER, category='numbers', name='Pennant Two',
         meaning='Numeral 2', image_path='/flags/two.svg', colors=['blue', 'white'],
         pattern='disc', order=8),
]


def make_item(id, key, name=None, type=FlagType.FLAG_LETTER, category='letters',
              colors=(), pattern=None, order=None):
    """Build a CatalogItem without touching the database."""
    return CatalogItem(
        id=id,
        key=key,
        type=type,
        category=category,
        name=name or key.title(),
        meaning=f'{key} meaning',
        image_path=f'/flags/{key}.svg',
        order=order if order is not None else id,
        colors=tuple(colors),
        pattern=pattern,
    )


def add_flags(records):
    flags = [Flag(**record) for record in records]
    db.session.add_all(flags)
    db.session.commit()
    return flags


def add_user(external_id='user_1', email=None):
    user = User(external_id=external_id, email=email or f'{external_id}@example.com', name=external_id)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def app():
    app = create_app(TestConfig)

    @app.before_request
    def _forget_previous_caller():
        # Client requests reuse the fixture's app context, so g outlives a request
        g.pop('_login_user', None)

    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def catalog(app):
    """Eight flags: six letters and two numeral pennants."""
    return add_flags(SAMPLE_FLAGS)


@pytest.fixture
def small_catalog(app):
    """Exactly four flags."""
    return add_flags(SAMPLE_FLAGS[:4])


@pytest.fixture
def user(app):
    return add_user('user_1')


@pytest.fixture
def other_user(app):
    return add_user('user_2')


@pytest.fixture
def auth_user(user):
    return AuthenticatedUser(user.user_id)


def auth_headers(user_or_subject):
    subject = getattr(user_or_subject, 'external_id', user_or_subject)
    return {TestConfig.AUTH_SUBJECT_HEADER: subject}
