"""
Unit tests for reading claims from backend tokens.
"""

import time

from jose import jwt

from conftest import make_token
from modules.auth_token import decode_claims, get_role, get_user_id, is_expired


class TestClaims:

    def test_role_is_lower_cased(self):
        assert get_role(make_token("MANAGER")) == "manager"
        assert get_role(make_token("AGENT")) == "agent"

    def test_role_as_string_claim(self):
        token = jwt.encode({"roles": "ADMIN"}, "key", algorithm="HS256")
        assert get_role(token) == "admin"

    def test_no_roles(self):
        token = jwt.encode({"userId": "u"}, "key", algorithm="HS256")
        assert get_role(token) is None

    def test_user_id(self):
        assert get_user_id(make_token(user_id="user-1")) == "user-1"

    def test_signature_is_not_verified(self):
        """Tokens signed with any key are readable; the backend verifies them."""
        token = jwt.encode({"userId": "u-9"}, "someone-elses-key", algorithm="HS256")
        assert decode_claims(token) == {"userId": "u-9"}

    def test_malformed(self):
        assert decode_claims("not-a-token") is None
        assert get_role("not-a-token") is None
        assert get_user_id(None) is None


class TestExpiry:

    def test_valid_token(self):
        assert not is_expired(make_token(expires_in=3600))

    def test_expired_token(self):
        assert is_expired(make_token(expires_in=-10))

    def test_missing_exp(self):
        token = jwt.encode({"roles": ["MANAGER"]}, "key", algorithm="HS256")
        assert is_expired(token)

    def test_missing_or_malformed(self):
        assert is_expired(None)
        assert is_expired("")
        assert is_expired("garbage")

    def test_explicit_now(self):
        exp = int(time.time()) + 100
        token = jwt.encode({"exp": exp}, "key", algorithm="HS256")
        assert not is_expired(token, now=exp - 1)
        assert is_expired(token, now=exp)
