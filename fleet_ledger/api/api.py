from fastapi import APIRouter

from fleet_ledger.api.endpoints import auth, costs, dashboard, export, health, photos, vehicles

# Create API router
api_router = APIRouter()

# Include endpoint routers with appropriate prefixes and tags
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
api_router.include_router(costs.router, prefix="/vehicles/{vehicle_id}/costs", tags=["costs"])
api_router.include_router(photos.router, prefix="/vehicles/{vehicle_id}/photos", tags=["photos"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(export.router, prefix="/export", tags=["export"])
