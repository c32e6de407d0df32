"""
Action routing for the multi-action endpoints.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from service.config import Settings
from service.db import DbClient
from service.errors import InvalidRequestError, UnauthorizedError

logger = logging.getLogger(__name__)


@dataclass
class ActionContext:
    db: DbClient
    settings: Settings
    user_id: Optional[str] = None

    def require_user(self) -> str:
        if not self.user_id:
            raise UnauthorizedError()
        return self.user_id


Action = Callable[[ActionContext, Dict[str, Any]], Any]


def dispatch(actions: Dict[str, Action], body: Dict[str, Any], ctx: ActionContext) -> Any:
    """
    Looks up `body["action"]` in a flat table and calls it with the rest of
    the body.

    Raises:
        InvalidRequestError: If the action is missing or unknown.
    """
    action = body.get("action")
    handler = actions.get(action) if isinstance(action, str) else None
    if handler is None:
        raise InvalidRequestError("Invalid action")

    params = {key: value for key, value in body.items() if key != "action"}
    logger.debug("Dispatching action %s", action)
    return handler(ctx, params)
