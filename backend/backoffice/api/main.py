"""
API模块统一入口
backend/backoffice/api/main.py
"""
from fastapi import APIRouter

from backoffice.api.v1.endpoints import auth, depts, dicts, menus, posts, roles, users

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(roles.router)
api_router.include_router(menus.router)
api_router.include_router(depts.router)
api_router.include_router(dicts.router)
api_router.include_router(posts.router)
