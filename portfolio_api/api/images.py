"""Project image upload API routes"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status

from portfolio_api.api.dependencies import get_portfolio_service, get_settings, require_admin
from portfolio_api.api.errors import ProblemDetail
from portfolio_api.api.uploads import parse_labels, read_upload
from portfolio_api.config import Settings
from portfolio_api.schemas.project import ImageLabelUpdate, Project
from portfolio_api.services import PortfolioService
from portfolio_api.services.portfolio_service import InvalidRequestError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["Images"], dependencies=[Depends(require_admin)])

NOT_FOUND = {404: {"model": ProblemDetail}}


@router.post(
    "/{project_id}/images",
    response_model=Project,
    status_code=status.HTTP_201_CREATED,
    responses={**NOT_FOUND, 400: {"model": ProblemDetail}, 502: {"model": ProblemDetail}},
)
async def add_project_images(
    project_id: str,
    images: Optional[List[UploadFile]] = File(None),
    labels: Optional[List[str]] = Form(None),
    settings: Settings = Depends(get_settings),
    service: PortfolioService = Depends(get_portfolio_service),
):
    """
    Upload images to a project.

    `labels` may be sent once per file, or once as a JSON array or a
    comma-separated list. Missing or unknown labels default to Exterior.

    Raises:
        HTTPException 400: No files, too many files, or a file is not an image
        HTTPException 404: Project not found
        HTTPException 502: Media host upload failed
    """
    images = images or []
    if len(images) > settings.max_upload_files:
        raise InvalidRequestError(f"At most {settings.max_upload_files} images per upload")

    await service.get_project(project_id)
    uploads = [await read_upload(file, settings.max_upload_size_bytes) for file in images]
    return await service.add_images(project_id, uploads, parse_labels(labels))


@router.patch("/{project_id}/images/{image_id}", response_model=Project, responses=NOT_FOUND)
async def update_project_image(
    project_id: str,
    image_id: str,
    payload: ImageLabelUpdate,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Change an image's label"""
    return await service.update_image_label(project_id, image_id, payload.label)


@router.delete(
    "/{project_id}/images/{image_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND,
)
async def delete_project_image(
    project_id: str,
    image_id: str,
    delete_remote: bool = Query(False, alias="deleteCloudinary", description="Also delete the file from the media host"),
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Remove an image from a project"""
    await service.delete_image(project_id, image_id, delete_remote)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
