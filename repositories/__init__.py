"""Persistence helpers for users, onboarding applications and admin tasks."""
