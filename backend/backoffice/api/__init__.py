"""
API模块
backend/backoffice/api/__init__.py
路由汇总见 backoffice.api.main
"""
