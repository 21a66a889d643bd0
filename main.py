from fastapi import FastAPI

from routers import health, notification
from utils.log_config import setup_logging

# =========================
# Logging
# =========================
setup_logging()

# =========================
# FastAPI 앱 생성
# =========================
app = FastAPI(
    title="Play Billing Relay",
    description="Relays Google Play RTDNs to the staging or production webhook",
    version="0.1.0",
)

# =========================
# 라우터 등록
# =========================
app.include_router(notification.router)
app.include_router(health.router)
