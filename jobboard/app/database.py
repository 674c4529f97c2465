"""In-memory document store backing the development backend.

Documents are plain dicts in wire shape (camelCase keys, string ``_id``) so
handlers can return them as-is. Nothing is persisted; each application
instance starts empty.
"""
import copy
import hashlib
import re
import secrets
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from jobboard.core.logging import setup_logging

logger = setup_logging('app_database')

_HASH_ITERATIONS = 100_000


def hash_password(password: str, salt: Optional[str] = None) -> str:
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac('sha256', password.encode(), salt.encode(), _HASH_ITERATIONS)
    return f"{salt}${digest.hex()}"


def verify_password(password: str, hashed: str) -> bool:
    salt, _, _ = hashed.partition('$')
    return secrets.compare_digest(hash_password(password, salt), hashed)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return uuid.uuid4().hex[:24]


class InMemoryDatabase:
    """Users and jobs collections."""

    def __init__(self):
        self.users: Dict[str, dict] = {}
        self.jobs: Dict[str, dict] = {}

    # Users

    def add_user(self, fields: dict, password: str) -> dict:
        user = {"_id": _new_id(), **fields, "password": hash_password(password), "createdAt": _now()}
        self.users[user["_id"]] = user
        logger.info(f"Registered user {user['_id']} ({user.get('role')})")
        return user

    def get_user(self, user_id: str) -> Optional[dict]:
        return self.users.get(user_id)

    def find_user_by_email(self, email: str) -> Optional[dict]:
        email = email.strip().lower()
        for user in self.users.values():
            if user.get("email", "").lower() == email:
                return user
        return None

    def update_user(self, user_id: str, fields: dict) -> dict:
        user = self.users[user_id]
        user.update(fields)
        return user

    def set_password(self, user_id: str, password: str) -> dict:
        return self.update_user(user_id, {"password": hash_password(password)})

    @staticmethod
    def public_user(user: dict) -> dict:
        return {k: copy.deepcopy(v) for k, v in user.items() if k != "password"}

    # Jobs

    def add_job(self, fields: dict, posted_by: str) -> dict:
        job = {"_id": _new_id(), **fields, "postedBy": posted_by, "jobPostedOn": _now()}
        self.jobs[job["_id"]] = job
        logger.info(f"Posted job {job['_id']}: {job.get('title')}")
        return job

    def get_job(self, job_id: str) -> Optional[dict]:
        return self.jobs.get(job_id)

    def delete_job(self, job_id: str) -> bool:
        return self.jobs.pop(job_id, None) is not None

    def find_jobs(
        self,
        city: Optional[str] = None,
        niche: Optional[str] = None,
        search_keyword: Optional[str] = None,
    ) -> List[dict]:
        """Filter jobs by exact city and niche and a case-insensitive keyword.

        The keyword matches title, company name or introduction.
        """
        results = []
        pattern = re.compile(re.escape(search_keyword), re.IGNORECASE) if search_keyword else None
        for job in self.jobs.values():
            if city and job.get("location") != city:
                continue
            if niche and job.get("jobNiche") != niche:
                continue
            if pattern and not any(
                pattern.search(job.get(field) or "")
                for field in ("title", "companyName", "introduction")
            ):
                continue
            results.append(job)
        return results

    def jobs_posted_by(self, user_id: str) -> List[dict]:
        return [job for job in self.jobs.values() if job.get("postedBy") == user_id]
