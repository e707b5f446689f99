"""Datastore adapters for brand projects and their generated kits.

Each write runs in its own transaction. A failure while saving a kit does
not remove the project created earlier in the same request; that orphan is
intentional and matches the documented partial-failure behavior.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from ..models.exceptions import UpstreamReadError, UpstreamWriteError
from ..models.records import BrandKitRecord, BrandProject
from ..models.schemas import BrandRequest
from .db import Database

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return str(value)


class ProjectStore:
    """Async facade over blocking SQLAlchemy sessions (run in worker threads)."""

    def __init__(self, database: Database):
        self.database = database

    async def create_project(self, request: BrandRequest, profile: Optional[str] = None) -> int:
        """Insert the project row and return its identity."""
        try:
            return await asyncio.to_thread(self._create_project, request, profile)
        except SQLAlchemyError as e:
            logger.error(
                "Project creation failed",
                extra={"user_id": str(request.user_id), "error_type": type(e).__name__, "error": str(e)},
            )
            raise UpstreamWriteError("Project creation failed", operation="create_project") from e

    def _create_project(self, request: BrandRequest, profile: Optional[str]) -> int:
        with self.database.session() as session:
            project = BrandProject(
                user_id=str(request.user_id),
                brand_name=request.brand_name,
                industry=_as_text(request.industry),
                audience=_as_text(request.audience),
                personality=_as_text(request.personality),
                details=request.descriptive_fields(),
                profile=profile,
            )
            session.add(project)
            session.flush()
            return project.id

    async def save_kit(self, project_id: int, result: Any, profile: Optional[str] = None, model: Optional[str] = None) -> int:
        """Insert the kit row linked to ``project_id`` and return its identity."""
        try:
            return await asyncio.to_thread(self._save_kit, project_id, result, profile, model)
        except SQLAlchemyError as e:
            logger.error(
                "Saving brand kit failed",
                extra={"project_id": project_id, "error_type": type(e).__name__, "error": str(e)},
            )
            raise UpstreamWriteError("Saving brand kit failed", operation="save_kit") from e

    def _save_kit(self, project_id: int, result: Any, profile: Optional[str], model: Optional[str]) -> int:
        with self.database.session() as session:
            kit = BrandKitRecord(project_id=project_id, result=result, profile=profile, model=model)
            session.add(kit)
            session.flush()
            return kit.id

    async def list_user_kits(self, user_id: str) -> List[Dict[str, Any]]:
        """All projects of ``user_id``, newest first, each with its latest kit or None."""
        try:
            return await asyncio.to_thread(self._list_user_kits, user_id)
        except SQLAlchemyError as e:
            logger.error(
                "Fetching brand kits failed",
                extra={"user_id": user_id, "error_type": type(e).__name__, "error": str(e)},
            )
            raise UpstreamReadError("Fetching brand kits failed") from e

    def _list_user_kits(self, user_id: str) -> List[Dict[str, Any]]:
        stmt = (
            select(BrandProject)
            .where(BrandProject.user_id == str(user_id))
            .options(selectinload(BrandProject.kits))
            .order_by(BrandProject.created_at.desc(), BrandProject.id.desc())
        )
        with self.database.session() as session:
            projects = session.execute(stmt).scalars().all()
            return [
                {
                    "id": project.id,
                    "brand_name": project.brand_name,
                    "created_at": project.created_at,
                    "kit": project.kits[0].result if project.kits else None,
                }
                for project in projects
            ]
