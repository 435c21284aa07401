from __future__ import annotations

import logging

from sqlalchemy import event, false
from sqlalchemy.orm import Session, with_loader_criteria

from grc_portal.rbac import Action, Scope

logger = logging.getLogger(__name__)


@event.listens_for(Session, "do_orm_execute")
def _apply_department_scope(execute_state) -> None:
    """
    Transparent data scoping.

    For each model that declares `__resource__`, the acting user's widest
    `view` scope decides what a plain `select(Model)` returns:
    - global: every row
    - department: rows of the acting user's current department only
    - no grant (or no department to compare with): no rows
    """

    if not execute_state.is_select:
        return

    authz = execute_state.session.info.get("authz")
    if authz is None:
        return

    # Local import to avoid cycles.
    from grc_portal.models.grc import SCOPED_MODELS  # noqa: WPS433 (local import)

    stmt = execute_state.statement
    for model in SCOPED_MODELS:
        scope = authz.scope(model.__resource__, Action.VIEW)
        if scope is Scope.GLOBAL:
            continue

        dept_id = authz.department_id
        if scope is Scope.DEPARTMENT and dept_id is not None:
            stmt = stmt.options(
                with_loader_criteria(model, lambda cls: cls.department_id == dept_id, include_aliases=True),
            )
        else:
            stmt = stmt.options(with_loader_criteria(model, lambda cls: false(), include_aliases=True))

    execute_state.statement = stmt
