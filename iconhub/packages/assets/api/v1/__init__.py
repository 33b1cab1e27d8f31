"""API v1 汇总路由：统一挂载所有版本化的子路由。"""

from fastapi import APIRouter

from iconhub.packages.assets.api.v1.endpoints import assets, categories, public

api_router = APIRouter()
api_router.include_router(assets.router)
api_router.include_router(categories.router)

# 公开资源路由挂载在 PUBLIC_MOUNT 下，而非 API 前缀下
public_router = public.router
