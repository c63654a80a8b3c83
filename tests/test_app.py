import pytest

from app import create_app
from cricket_ticker.models import FetchResult
from cricket_ticker.renderer import ImageRenderer, FanoutRenderer
from cricket_ticker.service import TickerService
from conftest import FakeFetcher, RecordingRenderer


@pytest.fixture
def preview():
    return ImageRenderer()


@pytest.fixture
def service(settings, matches, preview):
    svc = TickerService(settings, fetcher=FakeFetcher([FetchResult.success(matches)] * 3),
                        renderer=FanoutRenderer(RecordingRenderer(), preview))
    svc.request_refresh()
    svc.drain()
    return svc


@pytest.fixture
def client(service, settings, preview):
    app = create_app(service, settings, preview)
    app.config['TESTING'] = True
    return app.test_client()


def test_state(client):
    data = client.get('/api/state').get_json()
    assert data['meta']['status'] == 'Idle'
    assert data['display']['mode'] == 'SCORE'
    assert data['display']['match_count'] == 2
    assert data['settings']['brightness'] == 255


def test_status_page(client):
    resp = client.get('/')
    assert resp.status_code == 200
    assert b"Cricket Ticker" in resp.data


def test_config_roundtrip(client, service, settings):
    resp = client.post('/api/config', json={'brightness': 999, 'update_interval': 1, 'api_key': 'abc'})
    assert resp.status_code == 200
    body = resp.get_json()['settings']
    assert body['brightness'] == 255
    assert body['update_interval'] == 10
    assert body['api_key_set'] is True
    assert 'abc' not in resp.get_data(as_text=True)
    assert service.queue.get_nowait()[0] == 'config'


def test_config_reset(client, settings):
    settings.set_brightness(10)
    body = client.post('/api/config', json={'reset': True}).get_json()
    assert body['settings']['brightness'] == 255


def test_config_rejects_non_object(client):
    assert client.post('/api/config', json=[1, 2]).status_code == 400


def test_teams(client, settings):
    assert 'India' in client.get('/api/teams').get_json()['popular']
    client.post('/api/teams', json={'add': 'India'})
    client.post('/api/teams', json={'add': 'Pakistan'})
    body = client.post('/api/teams', json={'remove': 'India'}).get_json()
    assert body['favorites'] == ['Pakistan']
    assert settings.get_favorite_teams() == ['Pakistan']


def test_event(client, service):
    assert client.post('/api/event', json={'event': 'change'}).status_code == 200
    service.drain()
    assert service.controller.mode.name == 'RUN_RATE'


def test_unknown_event(client):
    resp = client.post('/api/event', json={'event': 'shake'})
    assert resp.status_code == 400
    assert 'change' in resp.get_json()['events']


def test_frame_png(client):
    resp = client.get('/api/frame.png')
    assert resp.status_code == 200
    assert resp.mimetype == 'image/png'
    assert resp.data[:8] == b'\x89PNG\r\n\x1a\n'


def test_frame_png_without_preview(service, settings):
    app = create_app(service, settings)
    assert app.test_client().get('/api/frame.png').status_code == 404


def test_config_single_favorite_string(client, settings, service):
    body = client.post('/api/config', json={'favorite_teams': 'India'}).get_json()
    assert body['settings']['favorite_teams'] == ['India']
    service.drain()
    assert [m.id for m in service.controller.matches] == ['m1']


@pytest.mark.parametrize("route", ['/api/teams', '/api/event'])
def test_non_object_body_is_rejected(client, route):
    resp = client.post(route, json=['India'])
    assert resp.status_code == 400
    assert resp.get_json()['status'] == 'error'
