from typing import List

from fastapi import APIRouter, Query, Response, status

from app.core.constants.routes import RouteConstants
from app.core.dependencies import DatabaseDep, ExpenseServiceDep
from app.core.exceptions import ExpenseNotFoundError, ValidationError
from app.modules.expenses.dto import ExpenseDto, ExpenseResponse
from app.modules.expenses.utils import is_valid_expense

router = APIRouter(prefix=RouteConstants.BASE_PATH, tags=["expenses"])


@router.get(RouteConstants.EXPENSES, response_model=List[ExpenseResponse])
async def read_expenses(
    db: DatabaseDep,
    expenses_service: ExpenseServiceDep,
) -> List[ExpenseResponse]:
    """API endpoint to list all expenses ordered by expense date"""
    expenses = await expenses_service.get_expenses(db)
    return [ExpenseResponse.model_validate(expense) for expense in expenses]


@router.get(RouteConstants.EXPENSES + "{key}", response_model=ExpenseResponse)
async def read_expense_by_key(
    key: int,
    db: DatabaseDep,
    expenses_service: ExpenseServiceDep,
) -> ExpenseResponse:
    """API endpoint to fetch an expense by primary key"""
    if key <= 0:
        raise ValidationError("Expense key must be a positive integer")

    expense = await expenses_service.get_expense(db, key)
    if expense is None:
        raise ExpenseNotFoundError(key)

    return ExpenseResponse.model_validate(expense)


@router.post(
    RouteConstants.CREATE_EXPENSE,
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_expense(
    expense_data: ExpenseDto,
    response: Response,
    db: DatabaseDep,
    expenses_service: ExpenseServiceDep,
) -> ExpenseResponse:
    """API endpoint to create a new expense"""
    if not is_valid_expense(expense_data):
        raise ValidationError("Expense date must not be in the future and amount must be greater than 0")

    expense = await expenses_service.create_expense(db, expense_data)

    # Location is keyed by category_id to keep the published route contract
    response.headers["Location"] = RouteConstants.location(
        RouteConstants.EXPENSES, expense.category_id
    )
    return ExpenseResponse.model_validate(expense)


@router.put(RouteConstants.UPDATE_EXPENSE, status_code=status.HTTP_204_NO_CONTENT)
async def update_expense(
    expense_data: ExpenseDto,
    db: DatabaseDep,
    expenses_service: ExpenseServiceDep,
    expense_id: int = Query(..., alias="id", description="Primary key of the expense to replace"),
) -> Response:
    """API endpoint to replace an expense"""
    if expense_id != expense_data.expense_id:
        raise ValidationError("Expense ID in query does not match the body")

    if not is_valid_expense(expense_data):
        raise ValidationError("Expense date must not be in the future and amount must be greater than 0")

    if not await expenses_service.expense_exists(db, expense_id):
        raise ExpenseNotFoundError(expense_id)

    await expenses_service.update_expense(db, expense_id, expense_data)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(RouteConstants.DELETE_EXPENSE + "{key}")
async def delete_expense(
    key: int,
    db: DatabaseDep,
    expenses_service: ExpenseServiceDep,
) -> Response:
    """API endpoint to delete an expense"""
    if key <= 0:
        raise ValidationError("Expense key must be a positive integer")

    expense = await expenses_service.get_expense(db, key)
    if expense is None:
        raise ExpenseNotFoundError(key)

    await expenses_service.delete_expense(db, expense)
    return Response(status_code=status.HTTP_200_OK)
