class RouteConstants:
    # Api base path
    BASE_PATH = "/api/expense-tracker"

    # Category routes
    CATEGORIES = "/categories/"
    CREATE_CATEGORY = "/categories/create"
    UPDATE_CATEGORY = "/categories/update"
    DELETE_CATEGORY = "/categories/delete/"

    # Expense routes
    EXPENSES = "/expenses/"
    CREATE_EXPENSE = "/expenses/create"
    UPDATE_EXPENSE = "/expenses/update"
    DELETE_EXPENSE = "/expenses/delete/"

    @staticmethod
    def location(route: str, key: int) -> str:
        """Absolute resource path for a Location header, e.g. /api/expense-tracker/expenses/3"""
        return f"{RouteConstants.BASE_PATH}{route}{key}"
