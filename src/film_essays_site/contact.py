from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class ContactMessage(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=320)
    message: str = Field(min_length=1, max_length=10_000)


@dataclass(frozen=True)
class ContactResult:
    ok: bool
    status_code: int | None = None
    error: str | None = None


@dataclass(frozen=True)
class ContactClient:
    """Forwards contact-form submissions to the external form relay. No retries."""

    endpoint: str
    timeout_s: float = 15.0
    transport: httpx.BaseTransport | None = None

    def submit(self, *, name: str, email: str, message: str) -> ContactResult:
        try:
            payload = ContactMessage(name=name.strip(), email=email.strip(), message=message.strip())
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
            return ContactResult(ok=False, error=f"invalid fields: {fields}")

        try:
            with httpx.Client(timeout=self.timeout_s, transport=self.transport) as client:
                resp = client.post(
                    self.endpoint,
                    headers={"Accept": "application/json"},
                    json=payload.model_dump(),
                )
        except httpx.HTTPError as e:
            logger.warning("Contact relay unreachable: %s", e)
            return ContactResult(ok=False, error=str(e) or e.__class__.__name__)

        if resp.is_success:
            return ContactResult(ok=True, status_code=resp.status_code)
        logger.warning("Contact relay rejected submission: HTTP %s", resp.status_code)
        return ContactResult(ok=False, status_code=resp.status_code, error=f"HTTP {resp.status_code}")
