from typing import List

from fastapi import APIRouter, Query, Response, status

from app.core.constants.routes import RouteConstants
from app.core.dependencies import DatabaseDep, CategoryServiceDep
from app.core.exceptions import CategoryNotFoundError, ValidationError
from app.modules.categories.dto import CategoryDto, CategoryResponseDto

router = APIRouter(prefix=RouteConstants.BASE_PATH, tags=["categories"])


@router.get(RouteConstants.CATEGORIES, response_model=List[CategoryResponseDto])
async def read_categories(
    db: DatabaseDep,
    categories_service: CategoryServiceDep,
) -> List[CategoryResponseDto]:
    """API endpoint to list all categories ordered by name"""
    categories = await categories_service.get_categories(db)
    return [CategoryResponseDto.model_validate(category) for category in categories]


@router.get(RouteConstants.CATEGORIES + "{key}", response_model=CategoryResponseDto)
async def read_category_by_key(
    key: int,
    db: DatabaseDep,
    categories_service: CategoryServiceDep,
) -> CategoryResponseDto:
    """API endpoint to fetch a category by primary key"""
    if key <= 0:
        raise ValidationError("Category key must be a positive integer")

    category = await categories_service.get_category(db, key)
    if category is None:
        raise CategoryNotFoundError(key)

    return CategoryResponseDto.model_validate(category)


@router.post(
    RouteConstants.CREATE_CATEGORY,
    response_model=CategoryResponseDto,
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    category_data: CategoryDto,
    response: Response,
    db: DatabaseDep,
    categories_service: CategoryServiceDep,
) -> CategoryResponseDto:
    """API endpoint to create a new category"""
    category = await categories_service.create_category(db, category_data)

    response.headers["Location"] = RouteConstants.location(
        RouteConstants.CATEGORIES, category.category_id
    )
    return CategoryResponseDto.model_validate(category)


@router.put(RouteConstants.UPDATE_CATEGORY, status_code=status.HTTP_204_NO_CONTENT)
async def update_category(
    category_data: CategoryDto,
    db: DatabaseDep,
    categories_service: CategoryServiceDep,
    category_id: int = Query(..., alias="id", description="Primary key of the category to replace"),
) -> Response:
    """API endpoint to replace a category"""
    if category_id != category_data.category_id:
        raise ValidationError("Category ID in query does not match the body")

    if not await categories_service.category_exists(db, category_id):
        raise CategoryNotFoundError(category_id)

    await categories_service.update_category(db, category_id, category_data)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(RouteConstants.DELETE_CATEGORY + "{key}")
async def delete_category(
    key: int,
    db: DatabaseDep,
    categories_service: CategoryServiceDep,
) -> Response:
    """API endpoint to delete a category"""
    if key <= 0:
        raise ValidationError("Category key must be a positive integer")

    category = await categories_service.get_category(db, key)
    if category is None:
        raise CategoryNotFoundError(key)

    await categories_service.delete_category(db, category)
    return Response(status_code=status.HTTP_200_OK)
