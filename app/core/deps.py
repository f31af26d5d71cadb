from app.core.config import (
    REGISTRATION_BACKOFF_SECONDS,
    REGISTRATION_MAX_RETRIES,
    REGISTRATION_TIMEOUT_SECONDS,
    REGISTRATION_URL,
)
from app.db.session import SessionLocal
from app.services.registration import (
    HttpRegistrationService,
    LoggingRegistrationService,
    RegistrationService,
)


# every request that needs DB will get a fresh session, and it will always close.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_registration_service() -> RegistrationService:
    if not REGISTRATION_URL:
        return LoggingRegistrationService()
    return HttpRegistrationService(
        REGISTRATION_URL,
        timeout=REGISTRATION_TIMEOUT_SECONDS,
        max_retries=REGISTRATION_MAX_RETRIES,
        backoff_seconds=REGISTRATION_BACKOFF_SECONDS,
    )
