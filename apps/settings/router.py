from fastapi import APIRouter, Depends
import logging

from apps.settings.schemas import ConnectionOverride, ConnectionStatus
from apps.auth.services import get_current_admin
from apps.auth.models import UserModel
from core.config import EDITABLE_KEYS, Settings, clear_override, get_settings, read_override, write_override

logger = logging.getLogger(__name__)

router = APIRouter()


def _active(settings: Settings) -> ConnectionOverride:
    return ConnectionOverride(**{key: getattr(settings, key) for key in EDITABLE_KEYS})


@router.get(
    "/connection",
    response_model=ConnectionStatus,
    summary="Connection settings",
    description="Saved operator override and the values the running process uses"
)
def get_connection(
    settings: Settings = Depends(get_settings),
    admin: UserModel = Depends(get_current_admin)
):
    return ConnectionStatus(override=ConnectionOverride(**read_override()), active=_active(settings))

@router.put(
    "/connection",
    response_model=ConnectionStatus,
    summary="Save connection override",
    description="Persist an operator override. It takes precedence over the environment after a restart."
)
def save_connection(
    override: ConnectionOverride,
    settings: Settings = Depends(get_settings),
    admin: UserModel = Depends(get_current_admin)
):
    saved = write_override(override.model_dump(exclude_none=True))
    logger.warning(f"Connection override changed by {admin.email}; restart to apply")
    return ConnectionStatus(override=ConnectionOverride(**saved), active=_active(settings), restart_required=True)

@router.delete(
    "/connection",
    response_model=ConnectionStatus,
    summary="Reset connection override",
    description="Remove the operator override and fall back to the environment defaults"
)
def reset_connection(
    settings: Settings = Depends(get_settings),
    admin: UserModel = Depends(get_current_admin)
):
    removed = clear_override()
    return ConnectionStatus(override=ConnectionOverride(), active=_active(settings), restart_required=removed)
