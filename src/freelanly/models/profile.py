"""The freelancer's own profile, used to pre-fill the resume wizard."""

from __future__ import annotations

from pydantic import BaseModel, Field


class UserProfile(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(default="", pattern=r"^$|^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str = ""
    location: str = ""
    website: str = ""
    job_title: str = ""

    def to_payload(self) -> dict[str, str]:
        """Profile fetch payload: name, email, phone, location, website, jobTitle."""
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "location": self.location,
            "website": self.website,
            "jobTitle": self.job_title,
        }
