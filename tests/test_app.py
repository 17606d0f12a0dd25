import sys
import os

# Add the parent directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import json

import pytest

from clueboard.app import create_app
from clueboard.config import Settings
from clueboard.progress import correct_answers_key
from clueboard.storage import MemoryStore


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def client(store, tmp_path):
    app = create_app(Settings(storage_path=str(tmp_path / "unused.json"), asset_base_url="/static/clues"), store=store)
    app.config['TESTING'] = True
    yield app.test_client()
    app.extensions['clueboard']['runner'].stop()


def test_list_levels(client):
    levels = client.get('/api/levels').get_json()
    assert [level['id'] for level in levels] == ['easylevel', 'colorsandshapes', 'cliches', 'homophones']


def test_commands_before_select_conflict(client):
    response = client.post('/api/submit', json={'position': '1-1', 'char': 'O'})
    assert response.status_code == 409


def test_select_unknown_level(client):
    assert client.post('/api/levels/nope/select').status_code == 404


def test_play_through_easylevel(client, store):
    state = client.post('/api/levels/easylevel/select').get_json()
    assert state['level']['title'] == 'Getting Started'
    assert state['solved'] is False

    body = client.post('/api/submit', json={'position': '1-1', 'char': 'o'}).get_json()
    assert body['accepted'] and body['became_correct']
    assert body['focus'] == '1-2'
    assert body['state']['grid'][1][1] == {'position': '1-1', 'kind': 'letter', 'guess': 'O', 'locked': True}

    body = client.post('/api/submit', json={'position': '1-1', 'char': 'x'}).get_json()
    assert body == {**body, 'accepted': False, 'became_correct': False, 'focus': None}

    ext = client.application.extensions['clueboard']
    ext['runner'].run(ext['board'].flush())
    stored = json.loads(store.data[correct_answers_key('easylevel')])
    assert stored == {'1-1': 'O'}


def test_invalid_cell_is_bad_request(client):
    client.post('/api/levels/easylevel/select')
    assert client.post('/api/submit', json={'position': '0-2', 'char': 'A'}).status_code == 400
    assert client.post('/api/submit', json={'position': 'zz', 'char': 'A'}).status_code == 400


def test_focus_and_key_endpoints(client):
    client.post('/api/levels/easylevel/select')
    client.post('/api/submit', json={'position': '1-3', 'char': 'Q'})

    body = client.post('/api/focus', json={'position': '1-3'}).get_json()
    assert body['outcome'] == 'editable'
    assert body['state']['grid'][1][3]['guess'] is None

    client.post('/api/submit', json={'position': '1-2', 'char': 'W'})
    body = client.post('/api/focus', json={'position': '1-2'}).get_json()
    assert body['outcome'] == 'blurred'
    assert body['blur'] == '1-2'

    body = client.post('/api/key', json={'position': '1-3', 'key': 'Backspace'}).get_json()
    assert body['handled'] is True
    # Stepping back lands on the locked 1-2, which drops focus again
    assert body['focus'] is None
    assert body['blur'] == '1-2'
    assert body['state']['grid'][1][2]['guess'] == 'W'


def test_clue_endpoint(client):
    client.post('/api/levels/easylevel/select')
    body = client.post('/api/clues/2A').get_json()
    assert body == {'clue_id': '2A', 'asset_path': '/static/clues/easylevel/clue2.png'}
    assert client.post('/api/clues/9Z').status_code == 404


def test_reset_endpoint(client, store):
    client.post('/api/levels/easylevel/select')
    client.post('/api/submit', json={'position': '1-1', 'char': 'O'})
    state = client.post('/api/reset').get_json()
    assert state['grid'][1][1]['guess'] is None
    assert correct_answers_key('easylevel') not in store.data


def test_non_object_body_is_bad_request(client):
    client.post('/api/levels/easylevel/select')
    assert client.post('/api/submit', json=['1-1', 'O']).status_code == 400
    assert client.post('/api/focus', json='1-1').status_code == 400


def test_runner_stop_ends_loop_thread(store, tmp_path):
    app = create_app(Settings(storage_path=str(tmp_path / "unused.json")), store=store)
    runner = app.extensions['clueboard']['runner']
    assert runner.call(lambda: 1 + 1) == 2
    runner.stop()
    assert not runner._thread.is_alive()
    assert runner.loop.is_closed()
