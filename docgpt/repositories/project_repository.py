"""
Project Repository - Projects and their original documents
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from docgpt.core.exceptions import NotFoundError, DuplicateError
from docgpt.models.project import Project
from docgpt.models.original_document import OriginalDocument

logger = logging.getLogger(__name__)


class ProjectRepository:
    """CRUD over Project and OriginalDocument"""

    def __init__(self, db: Session):
        self.db = db

    def create_project(self, name: str) -> Project:
        project = Project(name=name)
        self.db.add(project)
        self.db.commit()
        self.db.refresh(project)
        logger.info(f"Created project {project.id} ({name})")
        return project

    def get_project(self, project_id: UUID) -> Project:
        project = self.db.query(Project).filter(Project.id == project_id).first()
        if not project:
            raise NotFoundError("project", project_id)
        return project

    def add_original_document(self, project_id: UUID, path: str, content: str = "") -> OriginalDocument:
        """
        Register a source file of a project

        Raises:
            NotFoundError: project does not exist
            DuplicateError: the project already has a document at this path
        """
        project = self.get_project(project_id)

        existing = self.db.query(OriginalDocument).filter(
            OriginalDocument.project_id == project.id,
            OriginalDocument.path == path
        ).first()
        if existing:
            raise DuplicateError(f"Document '{path}' already exists in project {project.id}")

        document = OriginalDocument(project_id=project.id, path=path, content=content)
        self.db.add(document)
        self.db.commit()
        self.db.refresh(document)
        logger.info(f"Added document {path} to project {project.id}")
        return document

    def get_original_document(
        self,
        project_id: UUID,
        path: Optional[str] = None,
        document_id: Optional[UUID] = None
    ) -> OriginalDocument:
        """
        Look up a document of a project by path or id

        Only documents owned by the given project are ever returned.
        """
        if path is None and document_id is None:
            raise ValueError("Either 'path' or 'document_id' must be provided")

        query = self.db.query(OriginalDocument).filter(OriginalDocument.project_id == project_id)
        if document_id is not None:
            query = query.filter(OriginalDocument.id == document_id)
        if path is not None:
            query = query.filter(OriginalDocument.path == path)

        document = query.first()
        if not document:
            raise NotFoundError("document", path if path is not None else document_id)
        return document

    def list_original_documents(self, project_id: UUID) -> List[OriginalDocument]:
        self.get_project(project_id)
        return self.db.query(OriginalDocument).filter(
            OriginalDocument.project_id == project_id
        ).order_by(OriginalDocument.path).all()
