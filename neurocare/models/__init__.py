"""Pydantic schemas shared by the core, services and API layers."""
