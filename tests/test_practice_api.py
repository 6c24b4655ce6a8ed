import pytest

from conftest import add_user, auth_headers
from flagstack_app.models import PracticeSession, SessionStatus, db


def create(client, user, **payload):
    body = {'mode': 'learn', 'length': 5}
    body.update(payload)
    return client.post('/practice/api/sessions', json=body, headers=auth_headers(user))


def correct_option(session_id, index):
    session = db.session.get(PracticeSession, session_id)
    return session.questions[index]['correct_answer']


@pytest.mark.parametrize('headers', [{}, {'X-Auth-Subject': 'nobody'}])
def test_requests_without_known_identity_are_rejected(client, catalog, headers):
    response = client.post('/practice/api/sessions', json={'mode': 'learn', 'length': 5}, headers=headers)

    assert response.status_code == 401
    assert response.get_json()['code'] == 'UNAUTHENTICATED'
    assert PracticeSession.query.count() == 0


def test_create_session(client, catalog, user):
    response = create(client, user, seed=42)

    assert response.status_code == 201
    session_id = response.get_json()['data']['session_id']

    detail = client.get(f'/practice/api/sessions/{session_id}', headers=auth_headers(user)).get_json()['data']
    assert detail['status'] == 'active'
    assert detail['mode'] == 'learn'
    assert detail['session_length'] == 5
    assert detail['total_questions'] == 5
    assert detail['current_index'] == 0


def test_second_active_session_conflicts(client, catalog, user):
    first = create(client, user).get_json()['data']['session_id']

    response = create(client, user, mode='match')

    assert response.status_code == 409
    body = response.get_json()
    assert body['code'] == 'CONFLICT'
    assert body['details']['session_id'] == first
    assert PracticeSession.query.count() == 1


@pytest.mark.parametrize('payload', [
    {'length': 0},
    {'length': -3},
    {'length': 'ten'},
    {'mode': 'quiz'},
    {'seed': 'abc'},
])
def test_invalid_parameters_are_rejected(client, catalog, user, payload):
    response = create(client, user, **payload)

    assert response.status_code == 400
    assert response.get_json()['code'] == 'VALIDATION_ERROR'


def test_all_length_uses_whole_catalog(client, catalog, user):
    session_id = create(client, user, length='all').get_json()['data']['session_id']

    detail = client.get(f'/practice/api/sessions/{session_id}', headers=auth_headers(user)).get_json()['data']
    assert detail['session_length'] == len(catalog)
    assert len(detail['flag_ids']) == len(catalog)


def test_current_question_hides_answer(client, catalog, user):
    session_id = create(client, user).get_json()['data']['session_id']

    response = client.get(f'/practice/api/sessions/{session_id}/question', headers=auth_headers(user))

    assert response.status_code == 200
    data = response.get_json()['data']
    assert data['question_index'] == 0
    assert 'correct_answer' not in data['question']
    assert len(data['question']['options']) == 4
    assert data['progress']['total'] == 5
    assert data['progress']['current_index'] == 0


def test_answer_flow_to_completion(client, catalog, user):
    session_id = create(client, user).get_json()['data']['session_id']
    headers = auth_headers(user)

    result = None
    for index in range(5):
        option = correct_option(session_id, index)
        response = client.post(f'/practice/api/sessions/{session_id}/answer',
                               json={'question_index': index, 'option_id': option}, headers=headers)
        assert response.status_code == 200
        result = response.get_json()['data']
        assert result['is_correct'] is True
        assert result['streak'] == index + 1

    assert result['is_complete'] is True
    assert result['score'] == 100
    assert result['milestone_reached'] == 5

    question = client.get(f'/practice/api/sessions/{session_id}/question', headers=headers).get_json()
    assert question['data'] is None
    detail = client.get(f'/practice/api/sessions/{session_id}', headers=headers).get_json()['data']
    assert detail['status'] == 'completed'
    assert detail['completed_at'] is not None


def test_out_of_order_answer(client, catalog, user):
    session_id = create(client, user).get_json()['data']['session_id']

    response = client.post(f'/practice/api/sessions/{session_id}/answer',
                           json={'question_index': 2, 'option_id': 'opt_0'}, headers=auth_headers(user))

    assert response.status_code == 409
    body = response.get_json()
    assert body['code'] == 'SEQUENCE_ERROR'
    assert body['details'] == {'expected_index': 0, 'received_index': 2}


@pytest.mark.parametrize('payload', [
    {'question_index': '0', 'option_id': 'opt_0'},
    {'question_index': True, 'option_id': 'opt_0'},
    {'question_index': 0, 'option_id': ''},
    {'question_index': 0},
])
def test_malformed_answer_payload(client, catalog, user, payload):
    session_id = create(client, user).get_json()['data']['session_id']

    response = client.post(f'/practice/api/sessions/{session_id}/answer', json=payload,
                           headers=auth_headers(user))

    assert response.status_code == 400
    assert db.session.get(PracticeSession, session_id).current_index == 0


def test_foreign_session_is_forbidden(client, catalog, user):
    session_id = create(client, user).get_json()['data']['session_id']
    intruder = add_user('intruder')

    responses = [
        client.get(f'/practice/api/sessions/{session_id}', headers=auth_headers(intruder)),
        client.get(f'/practice/api/sessions/{session_id}/question', headers=auth_headers(intruder)),
        client.post(f'/practice/api/sessions/{session_id}/answer',
                    json={'question_index': 0, 'option_id': 'opt_0'}, headers=auth_headers(intruder)),
        client.post(f'/practice/api/sessions/{session_id}/abandon', headers=auth_headers(intruder)),
    ]

    assert [r.status_code for r in responses] == [403, 403, 403, 403]
    session = db.session.get(PracticeSession, session_id)
    assert session.status == SessionStatus.ACTIVE
    assert session.current_index == 0


def test_abandon_then_start_again(client, catalog, user):
    headers = auth_headers(user)
    session_id = create(client, user).get_json()['data']['session_id']

    response = client.post(f'/practice/api/sessions/{session_id}/abandon', headers=headers)
    assert response.status_code == 200

    again = client.post(f'/practice/api/sessions/{session_id}/abandon', headers=headers)
    assert again.status_code == 409

    assert create(client, user).status_code == 201


def test_incomplete_session_endpoint(client, catalog, user):
    headers = auth_headers(user)
    assert client.get('/practice/api/sessions/incomplete', headers=headers).get_json()['data'] is None

    session_id = create(client, user).get_json()['data']['session_id']

    data = client.get('/practice/api/sessions/incomplete', headers=headers).get_json()['data']
    assert data['session_id'] == session_id


def test_unknown_session(client, catalog, user):
    response = client.get('/practice/api/sessions/999', headers=auth_headers(user))

    assert response.status_code == 404
    assert response.get_json()['code'] == 'NOT_FOUND'


def test_catalog_too_small(client, app, user):
    response = create(client, user)

    assert response.status_code == 422
    assert response.get_json()['code'] == 'DATA_INTEGRITY_ERROR'


def test_length_equal_to_catalog_size(client, small_catalog, user):
    response = create(client, user, length=4)

    assert response.status_code == 201
    session_id = response.get_json()['data']['session_id']
    session = db.session.get(PracticeSession, session_id)
    catalog_keys = {flag.key for flag in small_catalog}
    for question in session.questions:
        assert {option['value'] for option in question['options']} == catalog_keys


def test_length_above_catalog_size_is_clamped(client, catalog, user):
    session_id = create(client, user, length=12).get_json()['data']['session_id']

    detail = client.get(f'/practice/api/sessions/{session_id}', headers=auth_headers(user)).get_json()['data']
    assert detail['session_length'] == 12
    assert detail['total_questions'] == len(catalog)


def test_each_request_resolves_its_own_caller(client, catalog, user):
    session_id = create(client, user).get_json()['data']['session_id']
    intruder = add_user('intruder')
    url = f'/practice/api/sessions/{session_id}'

    assert client.get(url, headers=auth_headers(user)).status_code == 200
    assert client.get(url, headers=auth_headers(intruder)).status_code == 403
    assert client.get(url).status_code == 401
    assert client.get(url, headers=auth_headers(user)).status_code == 200


def test_empty_results_keep_the_data_key(client, catalog, user):
    body = client.get('/practice/api/sessions/incomplete', headers=auth_headers(user)).get_json()

    assert body == {'success': True, 'data': None}
