from datetime import datetime, timezone

import pytest

from app.schemas.users import AccountResponse
from app.services.errors import Forbidden, Unauthorized
from app.services.roles import require_admin, require_mentor, require_role


def _account(role: str) -> AccountResponse:
    now = datetime.now(timezone.utc)
    return AccountResponse(
        id=1, name="Ada", email="ada@example.test", role=role, created_at=now, updated_at=now
    )


class TestRoleGate:
    def test_missing_account_is_unauthorized(self):
        with pytest.raises(Unauthorized):
            require_role(None, {"learner"})

    def test_role_outside_set_is_forbidden(self):
        with pytest.raises(Forbidden):
            require_role(_account("learner"), {"mentor", "admin"})

    def test_single_role_string(self):
        assert require_role(_account("mentor"), "mentor").role == "mentor"

    @pytest.mark.parametrize("role", ["learner", "mentor"])
    def test_admin_only_rejects(self, role):
        with pytest.raises(Forbidden):
            require_admin(_account(role))

    def test_admin_only_accepts_admin(self):
        assert require_admin(_account("admin")).role == "admin"

    @pytest.mark.parametrize("role", ["mentor", "admin"])
    def test_mentor_or_admin_accepts(self, role):
        assert require_mentor(_account(role)).role == role

    def test_mentor_or_admin_rejects_learner(self):
        with pytest.raises(Forbidden):
            require_mentor(_account("learner"))

    def test_admin_gate_without_account_is_unauthorized(self):
        with pytest.raises(Unauthorized):
            require_admin(None)
