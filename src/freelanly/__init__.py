"""Freelancer business management: clients, projects, documents and resumes."""

__version__ = "0.3.0"
