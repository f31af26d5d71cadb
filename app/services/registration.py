"""
Clients for the registration service that records final letter grades.

``HttpRegistrationService`` PUTs the batch to ``{base_url}/course/{course_id}``
and retries transport errors and 5xx responses with exponential backoff.
``LoggingRegistrationService`` is used when no registrar URL is configured.
"""

import logging
import time
from typing import Sequence

import requests

from app.core.errors import RegistrationError
from app.schemas.final_grade import FinalGradeDTO

logger = logging.getLogger(__name__)


class RegistrationService:
    def send_final_grades(self, course_id: int, grades: Sequence[FinalGradeDTO]) -> None:
        raise NotImplementedError


class LoggingRegistrationService(RegistrationService):
    def send_final_grades(self, course_id: int, grades: Sequence[FinalGradeDTO]) -> None:
        logger.info(
            "No registration service configured; %d final grade(s) for course %s not sent",
            len(grades),
            course_id,
        )
        for g in grades:
            logger.debug("course %s: %s -> %s", course_id, g.student_email, g.letter_grade)


class HttpRegistrationService(RegistrationService):
    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        max_retries: int = 3,
        backoff_seconds: float = 0.5,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max(0, max_retries)
        self.backoff_seconds = backoff_seconds
        self.session = session or requests.Session()

    def send_final_grades(self, course_id: int, grades: Sequence[FinalGradeDTO]) -> None:
        url = f"{self.base_url}/course/{course_id}"
        payload = [g.model_dump(by_alias=True) for g in grades]

        attempts = self.max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                response = self.session.put(url, json=payload, timeout=self.timeout)
            except requests.exceptions.RequestException as e:
                error = f"request failed: {e}"
            else:
                if response.status_code < 400:
                    logger.info(
                        "Sent %d final grade(s) for course %s to registration",
                        len(grades),
                        course_id,
                    )
                    return
                if response.status_code < 500:
                    # client errors will not improve on retry
                    raise RegistrationError(
                        f"Registration service rejected final grades for course {course_id}: "
                        f"HTTP {response.status_code}"
                    )
                error = f"HTTP {response.status_code}"

            logger.warning(
                "Registration attempt %d/%d for course %s failed: %s",
                attempt,
                attempts,
                course_id,
                error,
            )
            if attempt < attempts:
                time.sleep(self.backoff_seconds * (2 ** (attempt - 1)))

        raise RegistrationError(
            f"Registration service unavailable for course {course_id} after {attempts} attempt(s)"
        )
