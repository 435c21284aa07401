"""Tests for endpoint permission metadata."""

import pytest

from grc_portal.rbac import Action
from grc_portal.security.decorators import require_permission, required_permissions


def test_require_permission_attaches_metadata():
    @require_permission("risk.register", "edit")
    @require_permission("risk.register")
    def handler():
        return "ok"

    assert handler() == "ok"
    assert required_permissions(handler) == frozenset({("risk.register", Action.VIEW), ("risk.register", Action.EDIT)})


def test_required_permissions_of_plain_function_is_empty():
    assert required_permissions(lambda: None) == frozenset()
    assert required_permissions(None) == frozenset()


def test_unknown_action_rejected_at_declaration():
    with pytest.raises(ValueError):
        require_permission("risk.register", "publish")
