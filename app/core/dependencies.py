"""
Centralized dependency management
Singletons for stateless services, per-request for DB sessions
"""

from functools import lru_cache
from typing import AsyncGenerator, Annotated
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import Depends

from app.core.db.engine import get_db_util
from app.modules.expenses.service import ExpensesService
from app.modules.categories.service import CategoriesService


# ============================================================================
# PER-REQUEST DEPENDENCIES (New instance per request)
# ============================================================================


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session - NEW per request
    Automatically commits/rollbacks and closes
    """
    async for session in get_db_util():
        yield session


# ============================================================================
# SERVICE LAYER (Singletons that accept DB session)
# ============================================================================


@lru_cache()
def get_expense_service():
    """
    Expense service - SINGLETON
    Takes DB session as method parameter, not in constructor
    """
    return ExpensesService()


@lru_cache()
def get_category_service():
    """Category service - SINGLETON"""
    return CategoriesService()


# ============================================================================
# FASTAPI DEPENDENCY TYPE ALIASES
# ============================================================================

# Database dependencies
DatabaseDep = Annotated[AsyncSession, Depends(get_db)]

# Service dependencies
ExpenseServiceDep = Annotated[ExpensesService, Depends(get_expense_service)]
CategoryServiceDep = Annotated[CategoriesService, Depends(get_category_service)]
