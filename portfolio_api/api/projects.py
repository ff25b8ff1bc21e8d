"""Project management endpoints"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status

from portfolio_api.api.dependencies import get_portfolio_service, require_admin
from portfolio_api.api.errors import ProblemDetail
from portfolio_api.schemas.project import Project, ProjectCreate, ProjectUpdate
from portfolio_api.services import PortfolioService

router = APIRouter(prefix="/projects", tags=["Projects"])

NOT_FOUND = {404: {"model": ProblemDetail}}


@router.get("", response_model=List[Project])
async def list_projects(
    location: Optional[str] = Query(None, description="Only projects of this location id"),
    service: PortfolioService = Depends(get_portfolio_service),
):
    """List projects, optionally filtered by location"""
    return await service.list_projects(location)


@router.get("/{project_id}", response_model=Project, responses=NOT_FOUND)
async def get_project(project_id: str, service: PortfolioService = Depends(get_portfolio_service)):
    return await service.get_project(project_id)


@router.post(
    "",
    response_model=Project,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    responses={400: {"model": ProblemDetail}},
)
async def create_project(
    payload: ProjectCreate,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """
    Create a project in an existing location

    Returns 400 when the location does not exist.
    """
    return await service.create_project(payload)


@router.patch(
    "/{project_id}",
    response_model=Project,
    dependencies=[Depends(require_admin)],
    responses=NOT_FOUND,
)
async def update_project(
    project_id: str,
    payload: ProjectUpdate,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Update name, location, client number or cover image"""
    return await service.update_project(project_id, payload)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    responses=NOT_FOUND,
)
async def delete_project(project_id: str, service: PortfolioService = Depends(get_portfolio_service)):
    """Delete a project and its images on the media host"""
    await service.delete_project(project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
