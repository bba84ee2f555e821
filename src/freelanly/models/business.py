"""Pydantic models for clients and projects."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ProjectStatus(str, Enum):
    NEW = "New"
    IN_PROGRESS = "In Progress"
    PAID = "Paid"
    COMPLETED = "Completed"


class ClientIn(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    company: str | None = None
    language: str | None = None


class Client(ClientIn):
    id: int
    owner_id: str


class ProjectIn(BaseModel):
    client_id: int
    name: str = Field(min_length=1)
    description: str | None = None
    deadline: datetime | None = None
    amount: float | None = None
    status: ProjectStatus = ProjectStatus.NEW
    invoice_sent: bool = False


class Project(ProjectIn):
    id: int
    owner_id: str


class DashboardStats(BaseModel):
    active_clients: int
    ongoing_projects: int
    paid_revenue: float
    documents_generated: int
