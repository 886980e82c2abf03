"""Auth domain models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthContext:
    username: str
    role: str  # "user" | "admin"
