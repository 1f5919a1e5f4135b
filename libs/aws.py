"""
AWS session factory shared by the ingestion and benchmark services.
"""

from __future__ import annotations

import boto3

from libs.config import AWSConfig


def build_session(cfg: AWSConfig) -> boto3.session.Session:
    """
    Build a boto3 session for the configured profile and region.

    An empty profile falls back to boto3's default credential chain
    (environment, instance role, ...).
    """
    return boto3.session.Session(
        profile_name=cfg.profile or None,
        region_name=cfg.region,
    )
