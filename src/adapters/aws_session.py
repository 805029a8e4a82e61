"""Sesión boto3 compartida por los adaptadores AWS (SSM, IoT)."""

from __future__ import annotations

import boto3

from core.config import AppSettings


def build_session(settings: AppSettings | None = None) -> boto3.session.Session:
    """Crea la sesión respetando `aws_region` / `aws_profile` si están definidos."""

    settings = settings or AppSettings()
    return boto3.session.Session(
        region_name=settings.aws_region,
        profile_name=settings.aws_profile,
    )
