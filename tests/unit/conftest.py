import copy

import pytest
from pytest import MonkeyPatch

from fileshortener.constants import ENV
from fileshortener.dao.file import ShortURLFileDAO
from fileshortener.dao.memory import SessionMemoryDAO
from fileshortener.services import Services
from fileshortener.types import AppConfig
from fileshortener.utils.config import DEFAULT_CONFIG


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: MonkeyPatch) -> None:
    """Run every test against the default local environment."""
    for variable in (*ENV.App, *ENV.Shorten):
        monkeypatch.delenv(variable, raising=False)


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / 'data'


@pytest.fixture
def short_url_dao(data_dir) -> ShortURLFileDAO:
    dao = ShortURLFileDAO(data_dir=data_dir)
    yield dao
    dao.close()


@pytest.fixture
def session_dao() -> SessionMemoryDAO:
    dao = SessionMemoryDAO(max_lifetime=3600)
    yield dao
    dao.close()


@pytest.fixture
def config(data_dir) -> AppConfig:
    _config = copy.deepcopy(DEFAULT_CONFIG)
    _config['storage']['data_dir'] = str(data_dir)
    _config['auth'] = {'username': 'admin', 'password': 's3cret'}
    _config['shortener']['base_url'] = 'https://s.example.com'
    return _config


@pytest.fixture
def services(config, short_url_dao, session_dao) -> Services:
    return Services(config=config, short_urls=short_url_dao, sessions=session_dao)
