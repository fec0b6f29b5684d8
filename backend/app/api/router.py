"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from app.api.routes import users, groups, expenses, balances, personal

api_router = APIRouter()

# Include all route modules
api_router.include_router(users.router)
api_router.include_router(groups.router)
api_router.include_router(expenses.router)
api_router.include_router(balances.router)
api_router.include_router(personal.router)
