from __future__ import annotations

import logging
from functools import wraps
from typing import TYPE_CHECKING, Callable, Optional

from flask import flash, redirect, session, url_for

from .gate import Identity, Requirement, check_access

if TYPE_CHECKING:
    from ..container import Container

logger = logging.getLogger(__name__)

SESSION_KEY = "account_id"


def current_identity(container: "Container") -> Optional[Identity]:
    """Resolve the session's account to an Identity, dropping stale sessions."""
    account_id = session.get(SESSION_KEY)
    if account_id is None:
        return None

    identity = container.auth_service.resolve(int(account_id))
    if identity is None:
        logger.info("session refers to missing account %s, clearing", account_id)
        session.clear()
    return identity


def guard(container: "Container") -> Callable[[Requirement], Callable]:
    """Build the ``requires(...)`` decorator bound to a container.

    The wrapped view receives the resolved identity as ``identity=``.
    """

    def requires(requirement: Requirement):
        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                identity = current_identity(container)
                decision = check_access(identity, requirement)
                if not decision.allowed:
                    if identity is None:
                        flash("Please log in to continue.", "warning")
                    else:
                        logger.warning(
                            "access denied: account=%s role=%s view=%s",
                            identity.account_id,
                            identity.role.value,
                            view.__name__,
                        )
                        flash(decision.message, "danger")
                    return redirect(url_for(decision.redirect_to))
                return view(*args, identity=identity, **kwargs)

            return wrapper

        return decorator

    return requires
