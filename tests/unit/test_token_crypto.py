import time

import pytest
from jose import jwt

from portal.utils import token_crypto
from portal.utils.token_crypto import TokenRejected, TokenRejection

SECRET = "unit-secret"


def test_issue_and_decode_roundtrip():
    token = token_crypto.issue_token(7, "alice", secret=SECRET)
    claims = token_crypto.decode_token(token, secret=SECRET)
    assert claims.user_id == 7
    assert claims.username == "alice"
    assert claims.expires_at - claims.issued_at == 3600
    assert len(claims.jti) == 32


def test_each_token_gets_its_own_jti():
    a = token_crypto.decode_token(token_crypto.issue_token(1, "a", secret=SECRET), secret=SECRET)
    b = token_crypto.decode_token(token_crypto.issue_token(1, "a", secret=SECRET), secret=SECRET)
    assert a.jti != b.jti


def test_expired_token_is_rejected_as_expired():
    issued = int(time.time()) - 7200
    token = token_crypto.issue_token(1, "alice", secret=SECRET, now=issued)
    with pytest.raises(TokenRejected) as exc:
        token_crypto.decode_token(token, secret=SECRET)
    assert exc.value.reason is TokenRejection.EXPIRED


@pytest.mark.parametrize("token", ["garbage", "a.b.c"])
def test_garbage_token_is_malformed(token):
    with pytest.raises(TokenRejected) as exc:
        token_crypto.decode_token(token, secret=SECRET)
    assert exc.value.reason is TokenRejection.MALFORMED


def test_wrong_secret_is_malformed():
    token = token_crypto.issue_token(1, "alice", secret="other-secret")
    with pytest.raises(TokenRejected) as exc:
        token_crypto.decode_token(token, secret=SECRET)
    assert exc.value.reason is TokenRejection.MALFORMED


def test_missing_claims_are_malformed():
    token = jwt.encode({"sub": "1", "exp": int(time.time()) + 60}, SECRET, algorithm="HS256")
    with pytest.raises(TokenRejected) as exc:
        token_crypto.decode_token(token, secret=SECRET)
    assert exc.value.reason is TokenRejection.MALFORMED


def test_empty_token_is_missing():
    with pytest.raises(TokenRejected) as exc:
        token_crypto.decode_token("", secret=SECRET)
    assert exc.value.reason is TokenRejection.MISSING


def test_hash_and_verify_password():
    encoded = token_crypto.hash_password("secret1")
    assert encoded.startswith("$argon2id$")
    assert "secret1" not in encoded
    assert token_crypto.verify_password("secret1", encoded)
    assert not token_crypto.verify_password("secret2", encoded)


def test_hashes_are_salted():
    assert token_crypto.hash_password("secret1") != token_crypto.hash_password("secret1")


def test_verify_password_tolerates_bad_hash():
    assert token_crypto.verify_password("secret1", "not-a-hash") is False
    assert token_crypto.verify_password("", "whatever") is False
