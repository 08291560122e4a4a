from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from django.core.serializers.json import DjangoJSONEncoder

from ..models import StageEvent

logger = logging.getLogger(__name__)


def _jsonable(changes: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not changes:
        return {}
    return json.loads(json.dumps(changes, cls=DjangoJSONEncoder))


def record_event(
    *,
    stage: str,
    entity_type: str,
    entity_id: Any,
    user=None,
    changes: Optional[Dict[str, Any]] = None,
    firm: str = "",
) -> StageEvent:
    """Persist a completed workflow step.

    ``firm`` is the firm of the record the step was taken on; the events API
    is scoped on it.
    """

    if user is not None and not getattr(user, "is_authenticated", False):
        user = None
    event = StageEvent.objects.create(
        user=user,
        stage=stage,
        entity_type=entity_type,
        entity_id=str(entity_id),
        changes=_jsonable(changes),
        firm_name_match=firm or "",
    )
    logger.info("Stage %s completed for %s %s", stage, entity_type, entity_id)
    return event


def history_for(entity_type: str, entity_id: Any):
    return StageEvent.objects.filter(entity_type=entity_type, entity_id=str(entity_id))
