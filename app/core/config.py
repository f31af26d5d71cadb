import os
from datetime import timedelta

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./gradebook.db")

# DEV ONLY default secret. Set SECRET_KEY in any shared environment.
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE = timedelta(minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60")))

# Course title check applied when an assignment names its course.
#   reject_match  - a title equal to the course title is rejected (current behaviour)
#   require_match - a title different from the course title is rejected
#   off           - no title check
TITLE_RULES = ("reject_match", "require_match", "off")
COURSE_TITLE_RULE = os.getenv("COURSE_TITLE_RULE", "reject_match")
if COURSE_TITLE_RULE not in TITLE_RULES:
    raise ValueError(
        f"COURSE_TITLE_RULE must be one of {', '.join(TITLE_RULES)}, got {COURSE_TITLE_RULE!r}"
    )

# Registration service. Empty URL -> final grades are only logged.
REGISTRATION_URL = os.getenv("REGISTRATION_URL", "")
REGISTRATION_TIMEOUT_SECONDS = float(os.getenv("REGISTRATION_TIMEOUT_SECONDS", "10"))
REGISTRATION_MAX_RETRIES = int(os.getenv("REGISTRATION_MAX_RETRIES", "3"))
REGISTRATION_BACKOFF_SECONDS = float(os.getenv("REGISTRATION_BACKOFF_SECONDS", "0.5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))
