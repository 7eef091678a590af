# Project Analytics Routers
from .analytics import router as analytics_router
