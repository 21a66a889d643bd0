from fastapi import Depends, HTTPException, status

from config import Settings
from services.relay import NotificationRelay


def get_settings() -> Settings:
    # Read per invocation so destination changes apply without a restart.
    try:
        return Settings.from_env()
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


def get_relay(settings: Settings = Depends(get_settings)) -> NotificationRelay:
    return NotificationRelay(settings)
