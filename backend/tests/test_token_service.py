import jwt
import pytest

from backend.common.errors import Unauthenticated
from backend.services.system.token_service import TokenService


def test_issue_and_verify_round_trip():
    service = TokenService('secret-a')

    caller = service.verify(service.issue('emp-1', ['admin', 'Engineer', 'admin']))

    assert caller.subject == 'emp-1'
    assert caller.roles == frozenset({'admin', 'Engineer'})


def test_token_signed_with_other_secret_is_rejected():
    token = TokenService('secret-a').issue('emp-1', ['admin'])

    with pytest.raises(Unauthenticated):
        TokenService('secret-b').verify(token)


def test_expired_token_is_rejected():
    service = TokenService('secret-a', expires_minutes=-1)

    with pytest.raises(Unauthenticated) as exc_info:
        service.verify(service.issue('emp-1', ['admin']))
    assert 'expired' in exc_info.value.message


def test_token_without_subject_is_rejected():
    token = jwt.encode({'roles': ['admin']}, 'secret-a', algorithm='HS256')

    with pytest.raises(Unauthenticated):
        TokenService('secret-a').verify(token)
